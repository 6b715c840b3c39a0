"""
点赞表 ORM 模型

故事、页面、评论各一张表，(目标, user_session) 唯一
"""

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Index, UniqueConstraint
from datetime import datetime

from pagebound.db.base import Base


class StoryLike(Base):
    """故事点赞表"""
    __tablename__ = "story_likes"

    id = Column(String(64), primary_key=True, comment="点赞ID")
    story_id = Column(String(64), ForeignKey("stories.id", ondelete="CASCADE"), nullable=False, comment="故事ID")
    user_session = Column(String(64), nullable=False, comment="匿名会话ID")
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="点赞时间")

    __table_args__ = (
        UniqueConstraint('story_id', 'user_session', name='uk_story_like_session'),
        Index('idx_story_likes_story', 'story_id'),
    )


class PageLike(Base):
    """页面点赞表"""
    __tablename__ = "page_likes"

    id = Column(String(64), primary_key=True, comment="点赞ID")
    page_id = Column(String(64), ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, comment="页面ID")
    user_session = Column(String(64), nullable=False, comment="匿名会话ID")
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="点赞时间")

    __table_args__ = (
        UniqueConstraint('page_id', 'user_session', name='uk_page_like_session'),
        Index('idx_page_likes_page', 'page_id'),
    )


class CommentLike(Base):
    """评论点赞表"""
    __tablename__ = "comment_likes"

    id = Column(String(64), primary_key=True, comment="点赞ID")
    comment_id = Column(String(64), ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, comment="评论ID")
    user_session = Column(String(64), nullable=False, comment="匿名会话ID")
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="点赞时间")

    __table_args__ = (
        UniqueConstraint('comment_id', 'user_session', name='uk_comment_like_session'),
        Index('idx_comment_likes_comment', 'comment_id'),
    )
