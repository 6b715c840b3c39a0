"""
页面数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db.models.page import Page
from pagebound.db.dao.comment_dao import CommentDAO
from pagebound.db.dao.like_dao import LikeDAO
from pagebound.utils.id_generator import generate_page_id


class PageDAO:
    """页面 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        chapter_id: str,
        title: str,
        content: str,
        page_number: int,
        image_url: Optional[str] = None
    ) -> Page:
        """
        创建页面

        Args:
            session: 数据库会话
            chapter_id: 所属章节ID
            title: 页面标题
            content: 正文
            page_number: 页码（由调用方分配）
            image_url: 配图URL

        Returns:
            Page: 新创建的页面对象
        """
        page = Page(
            id=generate_page_id(),
            chapter_id=chapter_id,
            title=title,
            content=content,
            page_number=page_number,
            image_url=image_url,
        )

        session.add(page)
        await session.flush()

        return page

    @staticmethod
    async def get_by_id(session: AsyncSession, page_id: str) -> Optional[Page]:
        """根据ID获取页面"""
        result = await session.execute(
            select(Page).where(Page.id == page_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_by_chapter(session: AsyncSession, chapter_id: str) -> List[Page]:
        """获取章节的全部页面（按页码升序）"""
        result = await session.execute(
            select(Page)
            .where(Page.chapter_id == chapter_id)
            .order_by(Page.page_number.asc(), Page.created_at.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_by_chapter(session: AsyncSession, chapter_id: str) -> int:
        """统计章节当前的页面数"""
        result = await session.execute(
            select(func.count(Page.id)).where(Page.chapter_id == chapter_id)
        )
        return result.scalar() or 0

    @staticmethod
    async def count_by_chapters(session: AsyncSession, chapter_ids: List[str]) -> Dict[str, int]:
        """批量统计多个章节的页面数"""
        if not chapter_ids:
            return {}

        result = await session.execute(
            select(Page.chapter_id, func.count(Page.id))
            .where(Page.chapter_id.in_(chapter_ids))
            .group_by(Page.chapter_id)
        )
        return {chapter_id: count for chapter_id, count in result.all()}

    @staticmethod
    async def update(
        session: AsyncSession,
        page_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        image_url: Optional[str] = None
    ) -> Optional[Page]:
        """更新页面（None 表示不修改，页码不变）"""
        page = await PageDAO.get_by_id(session, page_id)
        if not page:
            return None

        if title is not None:
            page.title = title
        if content is not None:
            page.content = content
        if image_url is not None:
            page.image_url = image_url

        await session.flush()
        return page

    @staticmethod
    async def delete(session: AsyncSession, page_id: str) -> bool:
        """删除页面（级联删除点赞与评论，不重排页码）"""
        page = await PageDAO.get_by_id(session, page_id)
        if not page:
            return False

        page_ids = select(Page.id).where(Page.id == page_id)
        await LikeDAO.delete_for_pages(session, page_ids)
        await CommentDAO.delete_for_pages(session, page_ids)

        await session.delete(page)
        await session.flush()
        return True
