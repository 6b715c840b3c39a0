"""
故事浏览路由（故事列表、详情、章节、页面列表）
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, ReaderSession
from pagebound.api.deps import get_db_session, get_reader_session_optional, raise_for_error
from pagebound.services.story_service import story_service

router = APIRouter()


@router.get("/stories", response_model=ApiResponse)
async def list_stories(
    q: Optional[str] = Query(None, max_length=100, description="搜索关键词"),
    session: AsyncSession = Depends(get_db_session)
):
    """
    故事列表

    - 默认按创建时间倒序
    - 提供 q 时按标题/简介模糊搜索，结果按标题排序
    """
    return raise_for_error(await story_service.list_stories(session, q))


@router.get("/stories/{story_id}", response_model=ApiResponse)
async def get_story(
    story_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """故事详情（含展示点赞数、评论数、阅读数）"""
    result = await story_service.get_story(
        session, story_id, reader.session_id if reader else None
    )
    return raise_for_error(result)


@router.get("/stories/{story_id}/chapters", response_model=ApiResponse)
async def list_chapters(
    story_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """章节列表（按序号升序）"""
    return raise_for_error(await story_service.list_chapters(session, story_id))


@router.get("/chapters/{chapter_id}/pages", response_model=ApiResponse)
async def list_pages(
    chapter_id: str,
    session: AsyncSession = Depends(get_db_session)
):
    """页面列表（按页码升序）"""
    return raise_for_error(await story_service.list_pages(session, chapter_id))
