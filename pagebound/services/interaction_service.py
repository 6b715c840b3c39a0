"""
互动服务

处理故事、页面、评论的点赞切换与点赞状态查询
"""

from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, ErrorCode, error_response, LikeTarget
from pagebound.db.dao import LikeDAO, StoryDAO, ChapterDAO, PageDAO, CommentDAO
from pagebound.services.counters import bump_story_counter

_NOT_FOUND = {
    LikeTarget.STORY: (ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在"),
    LikeTarget.PAGE: (ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在"),
    LikeTarget.COMMENT: (ErrorCode.COMMENT_NOT_FOUND, "Comment not found", "评论不存在"),
}


async def _load_target(session: AsyncSession, target: LikeTarget, target_id: str):
    if target == LikeTarget.STORY:
        return await StoryDAO.get_by_id(session, target_id)
    if target == LikeTarget.PAGE:
        return await PageDAO.get_by_id(session, target_id)
    return await CommentDAO.get_by_id(session, target_id)


async def _display_count(session: AsyncSession, target: LikeTarget, target_obj, target_id: str) -> int:
    count = await LikeDAO.count(session, target, target_id)
    if target == LikeTarget.STORY:
        count += target_obj.fake_likes or 0
    return count


class InteractionService:
    """互动服务"""

    @staticmethod
    async def toggle_like(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        reader_session: str
    ) -> ApiResponse:
        """
        切换点赞状态

        已点赞则删除记录，未点赞则插入记录。插入时的唯一约束冲突
        视为"已点赞"，不会产生重复记录。返回的点赞数在写入后重新统计

        Args:
            session: 数据库会话
            target: 点赞目标类型
            target_id: 目标ID
            reader_session: 匿名会话ID

        Returns:
            API响应，包含 is_liked 与 like_count
        """
        target = LikeTarget(target)
        target_obj = await _load_target(session, target, target_id)
        if not target_obj:
            return error_response(*_NOT_FOUND[target])

        already_liked = await LikeDAO.is_liked(session, target, target_id, reader_session)

        if already_liked:
            await LikeDAO.remove(session, target, target_id, reader_session)
            is_liked = False
            message = "Like removed"
        else:
            inserted = await LikeDAO.add(session, target, target_id, reader_session)
            is_liked = True
            message = "Liked"
            if not inserted:
                logger.warning(f"⚠️  Concurrent like on {target.value} {target_id} by {reader_session}")
            elif target == LikeTarget.PAGE:
                chapter = await ChapterDAO.get_by_id(session, target_obj.chapter_id)
                if chapter:
                    await bump_story_counter(session, chapter.story_id, "fake_likes")

        like_count = await _display_count(session, target, target_obj, target_id)

        return ApiResponse(
            success=True,
            message=message,
            data={
                "target_type": target.value,
                "target_id": target_id,
                "is_liked": is_liked,
                "like_count": like_count,
            }
        )

    @staticmethod
    async def get_like_status(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        reader_session: Optional[str] = None
    ) -> ApiResponse:
        """获取点赞状态（没有会话时 is_liked 为 False）"""
        target = LikeTarget(target)
        target_obj = await _load_target(session, target, target_id)
        if not target_obj:
            return error_response(*_NOT_FOUND[target])

        is_liked = await LikeDAO.is_liked(session, target, target_id, reader_session)
        like_count = await _display_count(session, target, target_obj, target_id)

        return ApiResponse(
            success=True,
            data={
                "target_type": target.value,
                "target_id": target_id,
                "is_liked": is_liked,
                "like_count": like_count,
            }
        )


# 全局互动服务实例
interaction_service = InteractionService()
