"""
章节表 ORM 模型
"""

from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from pagebound.db.base import Base


class Chapter(Base):
    """章节表"""
    __tablename__ = "chapters"

    # 主键
    id = Column(String(64), primary_key=True, comment="章节ID")

    # 外键
    story_id = Column(String(64), ForeignKey("stories.id", ondelete="CASCADE"), nullable=False, comment="所属故事")

    # 基本信息
    # 序号按约定连续，不做唯一约束（删除后不重排）
    chapter_number = Column(Integer, nullable=False, comment="章节序号（从1开始）")
    title = Column(String(256), nullable=False, comment="章节标题")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    # 索引
    __table_args__ = (
        Index('idx_chapters_story_number', 'story_id', 'chapter_number'),
    )
