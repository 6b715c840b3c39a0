"""
创作服务

管理员登录，以及故事、章节、页面的创建、修改、删除和纯文本导入。

所有写操作都需要显式传入 AuthoringCapability。章节序号和页码在创建时
按"当前同级数量 + 1"分配，删除后不重新编号，因此删除中间项会留下空号。
"""

import random
from datetime import timedelta
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.config.settings import settings
from pagebound.models import ApiResponse, ErrorCode, error_response, AuthoringCapability
from pagebound.db.dao import StoryDAO, ChapterDAO, PageDAO
from pagebound.db.models import Story
from pagebound.services.presenters import story_to_dict, chapter_to_dict, page_to_dict
from pagebound.services.story_templates import STORY_TEMPLATES, pick_sample, template_chapters
from pagebound.utils.auth import verify_password, create_access_token, AUTHOR_SCOPE
from pagebound.utils.text_splitter import SplitChapter, split_text_into_chapters


def _denied() -> ApiResponse:
    return error_response(
        ErrorCode.AUTHORING_NOT_ALLOWED,
        "Authoring not allowed",
        "需要管理员权限"
    )


def _invalid(message: str, detail: str) -> ApiResponse:
    return error_response(ErrorCode.VALIDATION_FAILED, message, detail)


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _allowed(capability: Optional[AuthoringCapability]) -> bool:
    return capability is not None and capability.granted


async def _fill_story(session: AsyncSession, story: Story, split_chapters: List[SplitChapter]) -> Dict[str, Any]:
    """为已创建的故事按顺序写入章节（1..N）和页面（1..M）"""
    chapters = []
    total_pages = 0
    for chapter_number, split_chapter in enumerate(split_chapters, start=1):
        chapter = await ChapterDAO.create(session, story.id, split_chapter.title, chapter_number)
        for page_number, split_page in enumerate(split_chapter.pages, start=1):
            await PageDAO.create(
                session,
                chapter_id=chapter.id,
                title=split_page.title,
                content=split_page.content,
                page_number=page_number,
            )
        total_pages += len(split_chapter.pages)
        chapters.append(chapter_to_dict(chapter, len(split_chapter.pages)))

    data = story_to_dict(story)
    data["chapters"] = chapters
    data["page_count"] = total_pages
    return data


class AuthoringService:
    """创作服务"""

    @staticmethod
    async def admin_login(password: str) -> ApiResponse:
        """
        管理员登录

        校验共享口令，成功后签发带 author 权限范围的短期 token

        Args:
            password: 管理口令

        Returns:
            API响应，包含 token
        """
        if not verify_password(password, settings.ADMIN_PASSWORD_HASH):
            logger.warning("⚠️  Admin login rejected")
            return error_response(ErrorCode.INVALID_PASSWORD, "Invalid password", "口令错误")

        expires = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
        token = create_access_token(
            data={"sub": "admin", "scope": AUTHOR_SCOPE},
            expires_delta=expires
        )

        logger.info("🔑 Admin login succeeded")

        return ApiResponse(
            success=True,
            message="Login successful",
            data={
                "token": token,
                "token_type": "bearer",
                "scope": AUTHOR_SCOPE,
                "expires_in": int(expires.total_seconds()),
            }
        )

    # ==================== 故事 ====================

    @staticmethod
    async def create_story(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        title: str,
        description: Optional[str] = None,
        cover_image_url: Optional[str] = None
    ) -> ApiResponse:
        """
        创建故事

        Args:
            session: 数据库会话
            capability: 创作权限
            title: 标题（不能为空）
            description: 简介
            cover_image_url: 封面URL

        Returns:
            API响应，包含新故事
        """
        if not _allowed(capability):
            return _denied()
        if _blank(title):
            return _invalid("Title is required", "请填写故事标题")

        story = await StoryDAO.create(
            session,
            title=title.strip(),
            description=description,
            cover_image_url=cover_image_url,
        )

        logger.info(f"📚 Story created: {story.id} {story.title!r}")

        return ApiResponse(success=True, message="Story created", data=story_to_dict(story))

    @staticmethod
    async def update_story(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        story_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        cover_image_url: Optional[str] = None
    ) -> ApiResponse:
        """修改故事（未提供的字段保持不变）"""
        if not _allowed(capability):
            return _denied()
        if title is not None and _blank(title):
            return _invalid("Title cannot be empty", "故事标题不能为空")

        story = await StoryDAO.update(
            session,
            story_id,
            title=title.strip() if title is not None else None,
            description=description,
            cover_image_url=cover_image_url,
        )
        if not story:
            return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")

        logger.info(f"✏️  Story updated: {story_id}")

        return ApiResponse(success=True, message="Story updated", data=story_to_dict(story))

    @staticmethod
    async def delete_story(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        story_id: str
    ) -> ApiResponse:
        """删除故事（不可恢复，级联删除章节、页面、点赞与评论）"""
        if not _allowed(capability):
            return _denied()

        deleted = await StoryDAO.delete(session, story_id)
        if not deleted:
            return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")

        logger.info(f"🗑️  Story deleted: {story_id}")

        return ApiResponse(success=True, message="Story deleted", data={"story_id": story_id})

    # ==================== 章节 ====================

    @staticmethod
    async def create_chapter(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        story_id: str,
        title: str
    ) -> ApiResponse:
        """
        创建章节

        Args:
            session: 数据库会话
            capability: 创作权限
            story_id: 所属故事ID
            title: 章节标题

        Returns:
            API响应，包含新章节（chapter_number = 现有章节数 + 1）
        """
        if not _allowed(capability):
            return _denied()
        if _blank(title):
            return _invalid("Chapter title is required", "请填写章节标题")

        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")

        chapter_number = await ChapterDAO.count_by_story(session, story_id) + 1
        chapter = await ChapterDAO.create(session, story_id, title.strip(), chapter_number)

        logger.info(f"📖 Chapter {chapter_number} created in story {story_id}: {chapter.id}")

        return ApiResponse(success=True, message="Chapter created", data=chapter_to_dict(chapter, 0))

    @staticmethod
    async def update_chapter(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        chapter_id: str,
        title: str
    ) -> ApiResponse:
        """修改章节标题（序号不变）"""
        if not _allowed(capability):
            return _denied()
        if _blank(title):
            return _invalid("Chapter title cannot be empty", "章节标题不能为空")

        chapter = await ChapterDAO.update_title(session, chapter_id, title.strip())
        if not chapter:
            return error_response(ErrorCode.CHAPTER_NOT_FOUND, "Chapter not found", "章节不存在")

        return ApiResponse(success=True, message="Chapter updated", data=chapter_to_dict(chapter))

    @staticmethod
    async def delete_chapter(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        chapter_id: str
    ) -> ApiResponse:
        """删除章节（级联删除页面及互动数据，其他章节不重新编号）"""
        if not _allowed(capability):
            return _denied()

        deleted = await ChapterDAO.delete(session, chapter_id)
        if not deleted:
            return error_response(ErrorCode.CHAPTER_NOT_FOUND, "Chapter not found", "章节不存在")

        logger.info(f"🗑️  Chapter deleted: {chapter_id}")

        return ApiResponse(success=True, message="Chapter deleted", data={"chapter_id": chapter_id})

    # ==================== 页面 ====================

    @staticmethod
    async def create_page(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        chapter_id: str,
        title: str,
        content: str,
        image_url: Optional[str] = None
    ) -> ApiResponse:
        """
        创建页面

        Args:
            session: 数据库会话
            capability: 创作权限
            chapter_id: 所属章节ID
            title: 页面标题
            content: 正文
            image_url: 配图URL

        Returns:
            API响应，包含新页面（page_number = 现有页面数 + 1）
        """
        if not _allowed(capability):
            return _denied()
        if _blank(title) or _blank(content):
            return _invalid("Page title and content are required", "请填写页面标题和正文")

        chapter = await ChapterDAO.get_by_id(session, chapter_id)
        if not chapter:
            return error_response(ErrorCode.CHAPTER_NOT_FOUND, "Chapter not found", "章节不存在")

        page_number = await PageDAO.count_by_chapter(session, chapter_id) + 1
        page = await PageDAO.create(
            session,
            chapter_id=chapter_id,
            title=title.strip(),
            content=content,
            page_number=page_number,
            image_url=image_url,
        )

        logger.info(f"📄 Page {page_number} created in chapter {chapter_id}: {page.id}")

        return ApiResponse(success=True, message="Page created", data=page_to_dict(page))

    @staticmethod
    async def update_page(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        page_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        image_url: Optional[str] = None
    ) -> ApiResponse:
        """修改页面（页码不变）"""
        if not _allowed(capability):
            return _denied()
        if (title is not None and _blank(title)) or (content is not None and _blank(content)):
            return _invalid("Page title and content cannot be empty", "页面标题和正文不能为空")

        page = await PageDAO.update(
            session,
            page_id,
            title=title.strip() if title is not None else None,
            content=content,
            image_url=image_url,
        )
        if not page:
            return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")

        return ApiResponse(success=True, message="Page updated", data=page_to_dict(page))

    @staticmethod
    async def delete_page(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        page_id: str
    ) -> ApiResponse:
        """删除页面（级联删除点赞与评论，其他页面不重新编号）"""
        if not _allowed(capability):
            return _denied()

        deleted = await PageDAO.delete(session, page_id)
        if not deleted:
            return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")

        logger.info(f"🗑️  Page deleted: {page_id}")

        return ApiResponse(success=True, message="Page deleted", data={"page_id": page_id})

    # ==================== 导入 ====================

    @staticmethod
    async def import_story(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        title: str,
        source_text: str,
        description: Optional[str] = None,
        cover_image_url: Optional[str] = None
    ) -> ApiResponse:
        """
        从纯文本导入故事

        按章节标题启发式切分文本，在同一事务内创建故事、章节（1..N）
        和页面（每章 1..M）

        Args:
            session: 数据库会话
            capability: 创作权限
            title: 故事标题
            source_text: 已提取的原文
            description: 简介
            cover_image_url: 封面URL

        Returns:
            API响应，包含故事及各章节页数
        """
        if not _allowed(capability):
            return _denied()
        if _blank(title):
            return _invalid("Title is required", "请填写故事标题")
        if _blank(source_text):
            return _invalid("Source text is empty", "导入的文本为空")

        story = await StoryDAO.create(
            session,
            title=title.strip(),
            description=description,
            cover_image_url=cover_image_url,
        )
        split_chapters = split_text_into_chapters(
            source_text,
            words_per_page=settings.IMPORT_WORDS_PER_PAGE,
            heading_min_length=settings.IMPORT_HEADING_MIN_LENGTH,
            heading_max_length=settings.IMPORT_HEADING_MAX_LENGTH,
        )
        data = await _fill_story(session, story, split_chapters)

        logger.info(
            f"📥 Story imported: {story.id} {story.title!r} "
            f"({len(data['chapters'])} chapters, {data['page_count']} pages)"
        )

        return ApiResponse(success=True, message="Story imported", data=data)

    @staticmethod
    async def generate_sample_story(
        session: AsyncSession,
        capability: Optional[AuthoringCapability],
        template_index: Optional[int] = None,
        rng: Optional[random.Random] = None
    ) -> ApiResponse:
        """
        从内置模板生成一篇置顶的示例故事

        标题取随机变体前缀，展示计数取随机初始值；模板首段是章节标题，
        其余每段一页

        Args:
            session: 数据库会话
            capability: 创作权限
            template_index: 模板下标，None 时随机
            rng: 随机数生成器
        """
        if not _allowed(capability):
            return _denied()
        try:
            sample = pick_sample(template_index, rng)
        except IndexError:
            return _invalid(
                f"Unknown template {template_index}",
                f"模板编号需在 0 到 {len(STORY_TEMPLATES) - 1} 之间"
            )

        story = await StoryDAO.create(
            session,
            title=sample.title,
            description=sample.template.description,
            cover_image_url=sample.cover_image_url,
            is_pinned=True,
            auto_generated=True,
            **sample.counters,
        )
        data = await _fill_story(session, story, template_chapters(sample.template))
        data["genre"] = sample.template.genre

        logger.info(f"🪄 Sample story generated: {story.id} {story.title!r} ({sample.template.genre})")

        return ApiResponse(success=True, message=f"Story \"{story.title}\" generated and pinned", data=data)


# 全局创作服务实例
authoring_service = AuthoringService()
