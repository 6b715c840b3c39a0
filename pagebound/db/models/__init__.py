"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from pagebound.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .story import Story
from .chapter import Chapter
from .page import Page
from .comment import Comment
from .like import StoryLike, PageLike, CommentLike

__all__ = [
    # Base
    "Base",

    # Content
    "Story",
    "Chapter",
    "Page",

    # Engagement
    "Comment",
    "StoryLike",
    "PageLike",
    "CommentLike",
]
