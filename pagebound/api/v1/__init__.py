"""
API v1 路由汇总
"""

from fastapi import APIRouter

from .reader import router as reader_router
from .story import router as story_router
from .page import router as page_router
from .interaction import router as interaction_router
from .comment import router as comment_router
from .admin import router as admin_router

# 创建 v1 API 路由
api_router = APIRouter()

# 阅读
api_router.include_router(reader_router, tags=["Reader"])
api_router.include_router(story_router, tags=["Story"])
api_router.include_router(page_router, tags=["Page"])

# 互动
api_router.include_router(interaction_router, tags=["Interaction"])
api_router.include_router(comment_router, tags=["Comment"])

# 创作
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
