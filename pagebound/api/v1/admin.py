"""
创作模块路由（管理员）

除登录外，所有接口都需要 Authorization: Bearer <token>，
token 由 /admin/login 签发
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import (
    ApiResponse, AdminLogin, AuthoringCapability,
    StoryCreate, StoryUpdate, StoryImport,
    ChapterCreate, ChapterUpdate, PageCreate, PageUpdate,
)
from pagebound.api.deps import get_db_session, get_authoring_capability, raise_for_error
from pagebound.services.authoring_service import authoring_service

router = APIRouter()


@router.post("/login", response_model=ApiResponse)
async def admin_login(data: AdminLogin):
    """
    管理员登录

    - 校验共享口令
    - 返回带 author 权限范围的 token
    """
    return raise_for_error(await authoring_service.admin_login(data.password))


# ==================== 故事 ====================

@router.post("/stories", response_model=ApiResponse)
async def create_story(
    data: StoryCreate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """创建故事"""
    result = await authoring_service.create_story(
        session, capability, data.title, data.description, data.cover_image_url
    )
    return raise_for_error(result)


@router.post("/stories/import", response_model=ApiResponse)
async def import_story(
    data: StoryImport,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """
    从纯文本导入故事

    - "Chapter N" 行或全大写短行视为章节标题
    - 正文按词数切页
    """
    result = await authoring_service.import_story(
        session,
        capability,
        title=data.title,
        source_text=data.source_text,
        description=data.description,
        cover_image_url=data.cover_image_url,
    )
    return raise_for_error(result)


@router.post("/stories/generate", response_model=ApiResponse)
async def generate_sample_story(
    template: Optional[int] = Query(None, description="模板编号，缺省随机"),
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """
    从内置模板生成示例故事

    - 标题带随机变体前缀，展示计数取随机初始值
    - 生成的故事置顶，标记为 auto_generated
    """
    result = await authoring_service.generate_sample_story(session, capability, template_index=template)
    return raise_for_error(result)


@router.patch("/stories/{story_id}", response_model=ApiResponse)
async def update_story(
    story_id: str,
    data: StoryUpdate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """修改故事"""
    result = await authoring_service.update_story(
        session, capability, story_id, data.title, data.description, data.cover_image_url
    )
    return raise_for_error(result)


@router.delete("/stories/{story_id}", response_model=ApiResponse)
async def delete_story(
    story_id: str,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """删除故事（不可恢复，级联删除全部内容与互动）"""
    return raise_for_error(await authoring_service.delete_story(session, capability, story_id))


# ==================== 章节 ====================

@router.post("/stories/{story_id}/chapters", response_model=ApiResponse)
async def create_chapter(
    story_id: str,
    data: ChapterCreate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """创建章节（序号 = 现有章节数 + 1）"""
    result = await authoring_service.create_chapter(session, capability, story_id, data.title)
    return raise_for_error(result)


@router.patch("/chapters/{chapter_id}", response_model=ApiResponse)
async def update_chapter(
    chapter_id: str,
    data: ChapterUpdate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """修改章节标题"""
    result = await authoring_service.update_chapter(session, capability, chapter_id, data.title)
    return raise_for_error(result)


@router.delete("/chapters/{chapter_id}", response_model=ApiResponse)
async def delete_chapter(
    chapter_id: str,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """删除章节（不重新编号）"""
    return raise_for_error(await authoring_service.delete_chapter(session, capability, chapter_id))


# ==================== 页面 ====================

@router.post("/chapters/{chapter_id}/pages", response_model=ApiResponse)
async def create_page(
    chapter_id: str,
    data: PageCreate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """创建页面（页码 = 现有页面数 + 1）"""
    result = await authoring_service.create_page(
        session, capability, chapter_id, data.title, data.content, data.image_url
    )
    return raise_for_error(result)


@router.patch("/pages/{page_id}", response_model=ApiResponse)
async def update_page(
    page_id: str,
    data: PageUpdate,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """修改页面"""
    result = await authoring_service.update_page(
        session, capability, page_id, data.title, data.content, data.image_url
    )
    return raise_for_error(result)


@router.delete("/pages/{page_id}", response_model=ApiResponse)
async def delete_page(
    page_id: str,
    capability: AuthoringCapability = Depends(get_authoring_capability),
    session: AsyncSession = Depends(get_db_session)
):
    """删除页面（不重新编号）"""
    return raise_for_error(await authoring_service.delete_page(session, capability, page_id))
