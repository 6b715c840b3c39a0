"""
互动模块路由（点赞）
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, LikeTarget, ReaderSession
from pagebound.api.deps import (
    get_db_session, get_reader_session, get_reader_session_optional, raise_for_error
)
from pagebound.services.interaction_service import interaction_service

router = APIRouter()


async def _toggle(session: AsyncSession, target: LikeTarget, target_id: str, reader: ReaderSession):
    result = await interaction_service.toggle_like(session, target, target_id, reader.session_id)
    return raise_for_error(result)


async def _status(session: AsyncSession, target: LikeTarget, target_id: str, reader: Optional[ReaderSession]):
    result = await interaction_service.get_like_status(
        session, target, target_id, reader.session_id if reader else None
    )
    return raise_for_error(result)


@router.post("/stories/{story_id}/like", response_model=ApiResponse)
async def toggle_story_like(
    story_id: str,
    reader: ReaderSession = Depends(get_reader_session),
    session: AsyncSession = Depends(get_db_session)
):
    """
    切换故事点赞

    - 需要 X-Reader-Session
    - 已点赞则取消，未点赞则点赞
    """
    return await _toggle(session, LikeTarget.STORY, story_id, reader)


@router.get("/stories/{story_id}/like", response_model=ApiResponse)
async def get_story_like(
    story_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """故事点赞状态"""
    return await _status(session, LikeTarget.STORY, story_id, reader)


@router.post("/pages/{page_id}/like", response_model=ApiResponse)
async def toggle_page_like(
    page_id: str,
    reader: ReaderSession = Depends(get_reader_session),
    session: AsyncSession = Depends(get_db_session)
):
    """
    切换页面点赞

    - 需要 X-Reader-Session
    - 新增点赞时累加故事展示点赞数
    """
    return await _toggle(session, LikeTarget.PAGE, page_id, reader)


@router.get("/pages/{page_id}/like", response_model=ApiResponse)
async def get_page_like(
    page_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """页面点赞状态"""
    return await _status(session, LikeTarget.PAGE, page_id, reader)


@router.post("/comments/{comment_id}/like", response_model=ApiResponse)
async def toggle_comment_like(
    comment_id: str,
    reader: ReaderSession = Depends(get_reader_session),
    session: AsyncSession = Depends(get_db_session)
):
    """切换评论点赞"""
    return await _toggle(session, LikeTarget.COMMENT, comment_id, reader)


@router.get("/comments/{comment_id}/like", response_model=ApiResponse)
async def get_comment_like(
    comment_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """评论点赞状态"""
    return await _status(session, LikeTarget.COMMENT, comment_id, reader)
