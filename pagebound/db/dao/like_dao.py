"""
点赞数据访问对象（故事、页面、评论）
"""

from typing import Optional, List, Dict, Tuple
from sqlalchemy import select, func, delete, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db.models.like import StoryLike, PageLike, CommentLike
from pagebound.db.models.comment import Comment
from pagebound.models.engagement import LikeTarget
from pagebound.utils.id_generator import generate_like_id

# 点赞目标 -> (ORM 模型, 目标外键字段名)
_LIKE_TABLES = {
    LikeTarget.STORY: (StoryLike, "story_id"),
    LikeTarget.PAGE: (PageLike, "page_id"),
    LikeTarget.COMMENT: (CommentLike, "comment_id"),
}


def _resolve(target: LikeTarget) -> Tuple[type, object]:
    model, column_name = _LIKE_TABLES[LikeTarget(target)]
    return model, getattr(model, column_name)


class LikeDAO:
    """点赞 DAO"""

    @staticmethod
    async def find(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        user_session: str
    ):
        """查询某会话对目标的点赞记录"""
        model, column = _resolve(target)
        result = await session.execute(
            select(model).where(
                and_(column == target_id, model.user_session == user_session)
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def is_liked(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        user_session: Optional[str]
    ) -> bool:
        """检查会话是否已点赞目标"""
        if not user_session:
            return False
        return await LikeDAO.find(session, target, target_id, user_session) is not None

    @staticmethod
    async def add(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        user_session: str
    ) -> bool:
        """
        新增点赞

        在保存点内插入，唯一约束冲突时回滚保存点

        Args:
            session: 数据库会话
            target: 点赞目标类型
            target_id: 目标ID
            user_session: 匿名会话ID

        Returns:
            是否插入了新记录（False 表示已存在）
        """
        model, column = _resolve(target)
        like = model(id=generate_like_id(), user_session=user_session)
        setattr(like, column.key, target_id)

        try:
            async with session.begin_nested():
                session.add(like)
        except IntegrityError:
            return False

        return True

    @staticmethod
    async def remove(
        session: AsyncSession,
        target: LikeTarget,
        target_id: str,
        user_session: str
    ) -> bool:
        """
        取消点赞

        Returns:
            是否删除了记录
        """
        model, column = _resolve(target)
        result = await session.execute(
            delete(model)
            .where(and_(column == target_id, model.user_session == user_session))
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0

    @staticmethod
    async def count(session: AsyncSession, target: LikeTarget, target_id: str) -> int:
        """统计目标的点赞数"""
        model, column = _resolve(target)
        result = await session.execute(
            select(func.count(model.id)).where(column == target_id)
        )
        return result.scalar() or 0

    @staticmethod
    async def count_many(session: AsyncSession, target: LikeTarget, target_ids: List[str]) -> Dict[str, int]:
        """批量统计多个目标的点赞数"""
        if not target_ids:
            return {}

        model, column = _resolve(target)
        result = await session.execute(
            select(column, func.count(model.id))
            .where(column.in_(target_ids))
            .group_by(column)
        )
        return {target_id: count for target_id, count in result.all()}

    @staticmethod
    async def liked_among(
        session: AsyncSession,
        target: LikeTarget,
        target_ids: List[str],
        user_session: Optional[str]
    ) -> set:
        """返回会话已点赞的目标ID集合"""
        if not target_ids or not user_session:
            return set()

        model, column = _resolve(target)
        result = await session.execute(
            select(column).where(
                and_(column.in_(target_ids), model.user_session == user_session)
            )
        )
        return set(result.scalars().all())

    @staticmethod
    async def delete_for_pages(session: AsyncSession, page_ids):
        """
        删除一组页面的页面点赞及其评论的点赞

        Args:
            page_ids: 页面ID子查询
        """
        comment_ids = select(Comment.id).where(Comment.page_id.in_(page_ids))
        await session.execute(
            delete(CommentLike)
            .where(CommentLike.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        await session.execute(
            delete(PageLike)
            .where(PageLike.page_id.in_(page_ids))
            .execution_options(synchronize_session=False)
        )

    @staticmethod
    async def delete_for_story(session: AsyncSession, story_id: str):
        """删除故事级点赞及故事评论的点赞"""
        comment_ids = select(Comment.id).where(Comment.story_id == story_id)
        await session.execute(
            delete(CommentLike)
            .where(CommentLike.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        await session.execute(
            delete(StoryLike)
            .where(StoryLike.story_id == story_id)
            .execution_options(synchronize_session=False)
        )
