"""
故事数据访问对象
"""

from typing import Optional, List
from sqlalchemy import select, func, or_, delete
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db.models.story import Story
from pagebound.db.models.chapter import Chapter
from pagebound.db.models.page import Page
from pagebound.db.dao.comment_dao import CommentDAO
from pagebound.db.dao.like_dao import LikeDAO
from pagebound.utils.id_generator import generate_story_id

# 允许尽力累加的展示计数字段
COUNTER_FIELDS = ("fake_reads", "fake_likes", "fake_comments")

LIKE_ESCAPE = "\\"


def escape_like(keyword: str) -> str:
    """转义 LIKE 通配符，关键词按字面匹配"""
    return (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class StoryDAO:
    """故事 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        title: str,
        description: Optional[str] = None,
        cover_image_url: Optional[str] = None,
        is_pinned: bool = False,
        auto_generated: bool = False,
        **counters: int
    ) -> Story:
        """
        创建故事

        Args:
            session: 数据库会话
            title: 故事标题
            description: 故事简介
            cover_image_url: 封面URL
            is_pinned: 是否置顶
            auto_generated: 是否由模板生成
            counters: 展示计数初始值（fake_reads / fake_likes / fake_comments）

        Returns:
            Story: 新创建的故事对象
        """
        story = Story(
            id=generate_story_id(),
            title=title,
            description=description,
            cover_image_url=cover_image_url,
            is_pinned=is_pinned,
            auto_generated=auto_generated,
            **{name: counters.get(name, 0) for name in COUNTER_FIELDS},
        )

        session.add(story)
        await session.flush()

        return story

    @staticmethod
    async def get_by_id(session: AsyncSession, story_id: str) -> Optional[Story]:
        """根据ID获取故事"""
        result = await session.execute(
            select(Story).where(Story.id == story_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_stories(session: AsyncSession) -> List[Story]:
        """获取全部故事（按创建时间倒序）"""
        result = await session.execute(
            select(Story).order_by(Story.is_pinned.desc(), Story.created_at.desc(), Story.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def search_stories(session: AsyncSession, keyword: str) -> List[Story]:
        """
        按标题/简介模糊搜索故事

        Args:
            session: 数据库会话
            keyword: 搜索关键词（不区分大小写）

        Returns:
            匹配的故事列表（按标题字母序）
        """
        pattern = f"%{escape_like(keyword)}%"
        result = await session.execute(
            select(Story)
            .where(
                or_(
                    Story.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Story.description.ilike(pattern, escape=LIKE_ESCAPE)
                )
            )
            .order_by(func.lower(Story.title).asc(), Story.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def update(
        session: AsyncSession,
        story_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        cover_image_url: Optional[str] = None
    ) -> Optional[Story]:
        """更新故事基本信息（None 表示不修改）"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return None

        if title is not None:
            story.title = title
        if description is not None:
            story.description = description
        if cover_image_url is not None:
            story.cover_image_url = cover_image_url

        await session.flush()
        return story

    @staticmethod
    async def delete(session: AsyncSession, story_id: str) -> bool:
        """
        删除故事（级联删除章节、页面及全部互动数据）

        Args:
            session: 数据库会话
            story_id: 故事ID

        Returns:
            是否删除成功
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return False

        chapter_ids = select(Chapter.id).where(Chapter.story_id == story_id)
        page_ids = select(Page.id).where(Page.chapter_id.in_(chapter_ids))

        # 先删评论点赞，再删评论
        await LikeDAO.delete_for_pages(session, page_ids)
        await LikeDAO.delete_for_story(session, story_id)
        await CommentDAO.delete_for_pages(session, page_ids)
        await CommentDAO.delete_for_story(session, story_id)

        await session.execute(
            delete(Page)
            .where(Page.chapter_id.in_(chapter_ids))
            .execution_options(synchronize_session=False)
        )
        await session.execute(
            delete(Chapter)
            .where(Chapter.story_id == story_id)
            .execution_options(synchronize_session=False)
        )

        await session.delete(story)
        await session.flush()
        return True

    @staticmethod
    async def bump_counter(session: AsyncSession, story_id: str, field: str, amount: int = 1) -> Optional[int]:
        """
        累加展示计数（读-改-写，非原子）

        并发下可能丢失更新，仅用于展示

        Returns:
            新的计数值，故事不存在时返回 None
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown story counter: {field}")

        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return None

        current = getattr(story, field) or 0
        setattr(story, field, max(0, current + amount))
        await session.flush()
        return getattr(story, field)
