"""
页面阅读与翻页路由
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, Direction, ReaderSession
from pagebound.api.deps import get_db_session, get_reader_session_optional, raise_for_error
from pagebound.services.story_service import story_service
from pagebound.services.navigation_service import navigation_service, reading_cursors

router = APIRouter()


@router.get("/pages/{page_id}", response_model=ApiResponse)
async def read_page(
    page_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    阅读页面

    - 正文按内联图片链接切分为 text / image 片段
    - 返回点赞状态与评论
    - 累加故事阅读数（尽力而为）
    """
    result = await story_service.get_page(
        session, page_id, reader.session_id if reader else None
    )
    return raise_for_error(result)


@router.get("/pages/{page_id}/navigate", response_model=ApiResponse)
async def navigate(
    page_id: str,
    direction: Direction = Query(..., description="next 或 prev"),
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    翻页

    - 章节边界自动跨章，跳过空章节
    - 故事尽头返回 end_of_story=true，不是错误
    - 带 X-Reader-Session 时结果写入该会话的阅读游标，
      applied=false 表示已有更新的翻页请求，本结果被丢弃
    """
    cursor = reading_cursors.get(reader.session_id) if reader else None
    return raise_for_error(await navigation_service.navigate(session, page_id, direction, cursor))
