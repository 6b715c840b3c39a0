"""
故事服务

处理故事、章节、页面的浏览查询
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.config.settings import settings
from pagebound.models import ApiResponse, ErrorCode, error_response, LikeTarget, CommentTarget
from pagebound.db.dao import StoryDAO, ChapterDAO, PageDAO, LikeDAO, CommentDAO
from pagebound.services.comment_service import CommentService
from pagebound.services.counters import bump_story_counter
from pagebound.services.presenters import story_to_dict, chapter_to_dict, page_to_dict
from pagebound.utils.content import estimate_reading_minutes


class StoryService:
    """故事浏览服务"""

    @staticmethod
    async def list_stories(
        session: AsyncSession,
        keyword: Optional[str] = None
    ) -> ApiResponse:
        """
        获取故事列表

        Args:
            session: 数据库会话
            keyword: 搜索关键词（可选，匹配标题或简介）

        Returns:
            API响应，包含故事列表；为空时 message 提示暂无故事
        """
        keyword = (keyword or "").strip()
        if keyword:
            stories = await StoryDAO.search_stories(session, keyword)
        else:
            stories = await StoryDAO.list_stories(session)

        story_list = [story_to_dict(story) for story in stories]

        return ApiResponse(
            success=True,
            message=None if story_list else "No stories yet",
            data={
                "stories": story_list,
                "total": len(story_list),
                "keyword": keyword or None,
            }
        )

    @staticmethod
    async def get_story(
        session: AsyncSession,
        story_id: str,
        reader_session: Optional[str] = None
    ) -> ApiResponse:
        """
        获取故事详情

        点赞数、评论数为展示值：基数 + 真实记录数

        Args:
            session: 数据库会话
            story_id: 故事ID
            reader_session: 当前匿名会话（可选，用于判断点赞状态）
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")

        like_count = await LikeDAO.count(session, LikeTarget.STORY, story_id)
        comment_count = await CommentDAO.count_for_target(session, CommentTarget.STORY, story_id)
        is_liked = await LikeDAO.is_liked(session, LikeTarget.STORY, story_id, reader_session)
        chapter_count = await ChapterDAO.count_by_story(session, story_id)

        data = story_to_dict(
            story,
            like_count=(story.fake_likes or 0) + like_count,
            comment_count=(story.fake_comments or 0) + comment_count,
            is_liked=is_liked,
        )
        data["chapter_count"] = chapter_count

        return ApiResponse(success=True, data=data)

    @staticmethod
    async def list_chapters(session: AsyncSession, story_id: str) -> ApiResponse:
        """
        获取故事的章节列表（按序号升序）

        故事不存在返回 STORY_NOT_FOUND；没有章节时返回空列表
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")

        chapters = await ChapterDAO.list_by_story(session, story_id)
        page_counts = await PageDAO.count_by_chapters(session, [c.id for c in chapters])

        return ApiResponse(
            success=True,
            message=None if chapters else "No chapters yet",
            data={
                "story_id": story_id,
                "chapters": [
                    chapter_to_dict(chapter, page_counts.get(chapter.id, 0))
                    for chapter in chapters
                ],
                "total": len(chapters),
            }
        )

    @staticmethod
    async def list_pages(session: AsyncSession, chapter_id: str) -> ApiResponse:
        """获取章节的页面列表（按页码升序）"""
        chapter = await ChapterDAO.get_by_id(session, chapter_id)
        if not chapter:
            return error_response(ErrorCode.CHAPTER_NOT_FOUND, "Chapter not found", "章节不存在")

        pages = await PageDAO.list_by_chapter(session, chapter_id)

        return ApiResponse(
            success=True,
            message=None if pages else "No pages yet",
            data={
                "chapter": chapter_to_dict(chapter, len(pages)),
                "pages": [page_to_dict(page) for page in pages],
                "total": len(pages),
            }
        )

    @staticmethod
    async def get_page(
        session: AsyncSession,
        page_id: str,
        reader_session: Optional[str] = None
    ) -> ApiResponse:
        """
        阅读页面

        返回页面正文分段、所属章节与故事、点赞状态和评论；
        同时尽力累加故事的阅读数

        Args:
            session: 数据库会话
            page_id: 页面ID
            reader_session: 当前匿名会话（可选）
        """
        page = await PageDAO.get_by_id(session, page_id)
        if not page:
            return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")

        chapter = await ChapterDAO.get_by_id(session, page.chapter_id)
        story = await StoryDAO.get_by_id(session, chapter.story_id) if chapter else None
        if not chapter or not story:
            return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")

        like_count = await LikeDAO.count(session, LikeTarget.PAGE, page_id)
        is_liked = await LikeDAO.is_liked(session, LikeTarget.PAGE, page_id, reader_session)
        comment_count = await CommentDAO.count_for_target(session, CommentTarget.PAGE, page_id)
        comments = await CommentService.build_comment_tree(
            session, CommentTarget.PAGE, page_id, reader_session
        )

        await bump_story_counter(session, story.id, "fake_reads")

        data = page_to_dict(page, with_segments=True)
        data.update({
            "chapter": chapter_to_dict(chapter),
            "story": story_to_dict(story),
            "like_count": like_count,
            "is_liked": is_liked,
            "comment_count": comment_count,
            "comments": comments,
            "reading_minutes": estimate_reading_minutes(page.content, settings.WORDS_PER_MINUTE),
        })

        return ApiResponse(success=True, data=data)


# 全局故事服务实例
story_service = StoryService()
