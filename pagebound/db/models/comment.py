"""
评论表 ORM 模型
"""

from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Index, CheckConstraint
from datetime import datetime

from pagebound.db.base import Base


class Comment(Base):
    """评论表（故事评论与页面评论共用）"""
    __tablename__ = "comments"

    # 主键
    id = Column(String(64), primary_key=True, comment="评论ID")

    # 评论目标：story 或 page，对应外键二选一
    target_type = Column(String(16), nullable=False, comment="目标类型")
    story_id = Column(String(64), ForeignKey("stories.id", ondelete="CASCADE"), nullable=True, comment="故事ID")
    page_id = Column(String(64), ForeignKey("pages.id", ondelete="CASCADE"), nullable=True, comment="页面ID")
    parent_comment_id = Column(String(64), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, comment="父评论ID")

    # 评论内容（匿名，昵称自由填写）
    user_name = Column(String(64), nullable=False, comment="昵称")
    content = Column(Text, nullable=False, comment="评论内容")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")

    # 约束和索引
    __table_args__ = (
        CheckConstraint(
            "(story_id IS NOT NULL AND page_id IS NULL) OR (story_id IS NULL AND page_id IS NOT NULL)",
            name='ck_comment_single_target'
        ),
        Index('idx_comments_story', 'story_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_comments_page', 'page_id', 'created_at', postgresql_ops={'created_at': 'DESC'}),
        Index('idx_comments_parent', 'parent_comment_id'),
    )
