"""
评论数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, func, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db.models.comment import Comment
from pagebound.models.engagement import CommentTarget
from pagebound.utils.id_generator import generate_comment_id


def _target_column(target: CommentTarget):
    return Comment.story_id if CommentTarget(target) == CommentTarget.STORY else Comment.page_id


class CommentDAO:
    """评论 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        target: CommentTarget,
        target_id: str,
        user_name: str,
        content: str,
        parent_comment_id: Optional[str] = None
    ) -> Comment:
        """
        创建评论

        Args:
            session: 数据库会话
            target: 评论目标类型
            target_id: 故事ID或页面ID
            user_name: 昵称
            content: 评论内容
            parent_comment_id: 父评论ID（回复）

        Returns:
            Comment: 新创建的评论对象
        """
        target = CommentTarget(target)
        comment = Comment(
            id=generate_comment_id(),
            target_type=target.value,
            story_id=target_id if target == CommentTarget.STORY else None,
            page_id=target_id if target == CommentTarget.PAGE else None,
            user_name=user_name,
            content=content,
            parent_comment_id=parent_comment_id,
        )

        session.add(comment)
        await session.flush()

        return comment

    @staticmethod
    async def get_by_id(session: AsyncSession, comment_id: str) -> Optional[Comment]:
        """根据ID获取评论"""
        result = await session.execute(
            select(Comment).where(Comment.id == comment_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_top_level(
        session: AsyncSession,
        target: CommentTarget,
        target_id: str
    ) -> List[Comment]:
        """
        获取目标的顶级评论（最新在前）

        Args:
            session: 数据库会话
            target: 评论目标类型
            target_id: 故事ID或页面ID

        Returns:
            评论列表
        """
        result = await session.execute(
            select(Comment)
            .where(
                and_(
                    _target_column(target) == target_id,
                    Comment.parent_comment_id.is_(None)
                )
            )
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_replies(session: AsyncSession, parent_comment_id: str) -> List[Comment]:
        """获取评论的直接回复（最早在前）"""
        result = await session.execute(
            select(Comment)
            .where(Comment.parent_comment_id == parent_comment_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_replies(session: AsyncSession, parent_comment_ids: List[str]) -> Dict[str, int]:
        """批量统计直接回复数"""
        if not parent_comment_ids:
            return {}

        result = await session.execute(
            select(Comment.parent_comment_id, func.count(Comment.id))
            .where(Comment.parent_comment_id.in_(parent_comment_ids))
            .group_by(Comment.parent_comment_id)
        )
        return {parent_id: count for parent_id, count in result.all()}

    @staticmethod
    async def count_for_target(session: AsyncSession, target: CommentTarget, target_id: str) -> int:
        """统计目标下的全部评论数（含回复）"""
        result = await session.execute(
            select(func.count(Comment.id)).where(_target_column(target) == target_id)
        )
        return result.scalar() or 0

    @staticmethod
    async def delete_for_pages(session: AsyncSession, page_ids):
        """删除一组页面下的全部评论（page_ids 为子查询）"""
        await session.execute(
            delete(Comment)
            .where(Comment.page_id.in_(page_ids))
            .execution_options(synchronize_session=False)
        )

    @staticmethod
    async def delete_for_story(session: AsyncSession, story_id: str):
        """删除故事级评论"""
        await session.execute(
            delete(Comment)
            .where(Comment.story_id == story_id)
            .execution_options(synchronize_session=False)
        )
