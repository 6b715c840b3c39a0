"""
数据模型模块

导出所有 Pydantic 数据模型，用于 API 请求/响应验证
"""

# 通用响应
from .response import ApiResponse, ErrorCode, error_response

# 故事模块
from .story import StoryCreate, StoryUpdate, StoryImport

# 章节/页面模块
from .chapter import ChapterCreate, ChapterUpdate, PageCreate, PageUpdate

# 互动模块
from .engagement import LikeTarget, CommentTarget, CommentCreate

# 阅读会话模块
from .reader import Direction, ReaderSession, AuthoringCapability, AdminLogin, ReaderConfig

__all__ = [
    # Response
    "ApiResponse",
    "ErrorCode",
    "error_response",

    # Story
    "StoryCreate",
    "StoryUpdate",
    "StoryImport",

    # Chapter / Page
    "ChapterCreate",
    "ChapterUpdate",
    "PageCreate",
    "PageUpdate",

    # Engagement
    "LikeTarget",
    "CommentTarget",
    "CommentCreate",

    # Reader
    "Direction",
    "ReaderSession",
    "AuthoringCapability",
    "AdminLogin",
    "ReaderConfig",
]
