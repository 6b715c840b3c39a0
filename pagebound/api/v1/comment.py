"""
评论模块路由
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, CommentCreate, CommentTarget, ReaderSession
from pagebound.api.deps import get_db_session, get_reader_session_optional, raise_for_error
from pagebound.services.comment_service import comment_service

router = APIRouter()


@router.get("/stories/{story_id}/comments", response_model=ApiResponse)
async def get_story_comments(
    story_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    故事评论列表

    - 顶级评论最新在前
    - 开启嵌套时附带回复（最早在前）
    """
    result = await comment_service.list_comments(
        session, CommentTarget.STORY, story_id, reader.session_id if reader else None
    )
    return raise_for_error(result)


@router.post("/stories/{story_id}/comments", response_model=ApiResponse)
async def create_story_comment(
    story_id: str,
    data: CommentCreate,
    session: AsyncSession = Depends(get_db_session)
):
    """
    发表故事评论

    - 昵称与内容必填，内容不超过 2000 字符
    - parent_comment_id 必须属于同一故事
    """
    result = await comment_service.post_comment(
        session, CommentTarget.STORY, story_id, data.user_name, data.content, data.parent_comment_id
    )
    return raise_for_error(result)


@router.get("/pages/{page_id}/comments", response_model=ApiResponse)
async def get_page_comments(
    page_id: str,
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """页面评论列表"""
    result = await comment_service.list_comments(
        session, CommentTarget.PAGE, page_id, reader.session_id if reader else None
    )
    return raise_for_error(result)


@router.post("/pages/{page_id}/comments", response_model=ApiResponse)
async def create_page_comment(
    page_id: str,
    data: CommentCreate,
    session: AsyncSession = Depends(get_db_session)
):
    """
    发表页面评论

    - 累加故事展示评论数（尽力而为）
    """
    result = await comment_service.post_comment(
        session, CommentTarget.PAGE, page_id, data.user_name, data.content, data.parent_comment_id
    )
    return raise_for_error(result)
