"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .like_dao import LikeDAO
from .comment_dao import CommentDAO
from .story_dao import StoryDAO
from .chapter_dao import ChapterDAO
from .page_dao import PageDAO

__all__ = [
    "LikeDAO",
    "CommentDAO",
    "StoryDAO",
    "ChapterDAO",
    "PageDAO",
]
