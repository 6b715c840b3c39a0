"""
章节数据访问对象
"""

from typing import Optional, List
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db.models.chapter import Chapter
from pagebound.db.models.page import Page
from pagebound.db.dao.comment_dao import CommentDAO
from pagebound.db.dao.like_dao import LikeDAO
from pagebound.utils.id_generator import generate_chapter_id


class ChapterDAO:
    """章节 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        story_id: str,
        title: str,
        chapter_number: int
    ) -> Chapter:
        """
        创建章节

        Args:
            session: 数据库会话
            story_id: 所属故事ID
            title: 章节标题
            chapter_number: 章节序号（由调用方分配）

        Returns:
            Chapter: 新创建的章节对象
        """
        chapter = Chapter(
            id=generate_chapter_id(),
            story_id=story_id,
            title=title,
            chapter_number=chapter_number,
        )

        session.add(chapter)
        await session.flush()

        return chapter

    @staticmethod
    async def get_by_id(session: AsyncSession, chapter_id: str) -> Optional[Chapter]:
        """根据ID获取章节"""
        result = await session.execute(
            select(Chapter).where(Chapter.id == chapter_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_story(session: AsyncSession, story_id: str) -> List[Chapter]:
        """获取故事的全部章节（按序号升序）"""
        result = await session.execute(
            select(Chapter)
            .where(Chapter.story_id == story_id)
            .order_by(Chapter.chapter_number.asc(), Chapter.created_at.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_by_story(session: AsyncSession, story_id: str) -> int:
        """统计故事当前的章节数"""
        result = await session.execute(
            select(func.count(Chapter.id)).where(Chapter.story_id == story_id)
        )
        return result.scalar() or 0

    @staticmethod
    async def update_title(session: AsyncSession, chapter_id: str, title: str) -> Optional[Chapter]:
        """修改章节标题（序号不变）"""
        chapter = await ChapterDAO.get_by_id(session, chapter_id)
        if not chapter:
            return None

        chapter.title = title
        await session.flush()
        return chapter

    @staticmethod
    async def delete(session: AsyncSession, chapter_id: str) -> bool:
        """
        删除章节（级联删除页面及其互动数据，不重排序号）

        Args:
            session: 数据库会话
            chapter_id: 章节ID

        Returns:
            是否删除成功
        """
        chapter = await ChapterDAO.get_by_id(session, chapter_id)
        if not chapter:
            return False

        page_ids = select(Page.id).where(Page.chapter_id == chapter_id)

        await LikeDAO.delete_for_pages(session, page_ids)
        await CommentDAO.delete_for_pages(session, page_ids)
        await session.execute(
            delete(Page)
            .where(Page.chapter_id == chapter_id)
            .execution_options(synchronize_session=False)
        )

        await session.delete(chapter)
        await session.flush()
        return True
