"""
故事表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, TIMESTAMP, Index
from datetime import datetime

from pagebound.db.base import Base


class Story(Base):
    """故事表"""
    __tablename__ = "stories"

    # 主键
    id = Column(String(64), primary_key=True, comment="故事ID")

    # 基本信息
    title = Column(String(256), nullable=False, comment="故事标题")
    description = Column(Text, nullable=True, comment="故事简介")
    cover_image_url = Column(String(512), nullable=True, comment="封面图片URL")

    # 展示用统计（非权威，尽力而为的累加）
    fake_reads = Column(Integer, nullable=False, default=0, comment="展示阅读数")
    fake_likes = Column(Integer, nullable=False, default=0, comment="展示点赞基数")
    fake_comments = Column(Integer, nullable=False, default=0, comment="展示评论基数")

    # 模板生成的示例故事置顶展示
    is_pinned = Column(Boolean, nullable=False, default=False, comment="是否置顶")
    auto_generated = Column(Boolean, nullable=False, default=False, comment="是否由模板生成")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    # 索引
    __table_args__ = (
        Index('idx_stories_created_at', 'created_at', postgresql_ops={'created_at': 'DESC'}),
    )
