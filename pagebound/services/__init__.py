"""
业务服务层
"""

from .comment_service import comment_service, CommentService
from .story_service import story_service, StoryService
from .interaction_service import interaction_service, InteractionService
from .navigation_service import (
    navigation_service, NavigationService, ReadingCursor, ReadingCursorRegistry, reading_cursors, resolve_neighbor
)
from .authoring_service import authoring_service, AuthoringService
from .counters import bump_story_counter

__all__ = [
    # 浏览服务
    "StoryService",
    "NavigationService",
    "ReadingCursor",
    "ReadingCursorRegistry",
    "reading_cursors",
    "resolve_neighbor",
    # 互动服务
    "CommentService",
    "InteractionService",
    "bump_story_counter",
    # 创作服务
    "AuthoringService",
    # 全局服务实例
    "story_service",
    "navigation_service",
    "comment_service",
    "interaction_service",
    "authoring_service",
]
