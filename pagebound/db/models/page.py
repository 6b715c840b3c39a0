"""
页面表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from pagebound.db.base import Base


class Page(Base):
    """页面表"""
    __tablename__ = "pages"

    # 主键
    id = Column(String(64), primary_key=True, comment="页面ID")

    # 外键
    chapter_id = Column(String(64), ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, comment="所属章节")

    # 页面内容
    page_number = Column(Integer, nullable=False, comment="页码（从1开始）")
    title = Column(String(256), nullable=False, comment="页面标题")
    content = Column(Text, nullable=False, comment="正文（纯文本，可内嵌图片URL）")
    image_url = Column(String(512), nullable=True, comment="配图URL")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    # 索引
    __table_args__ = (
        Index('idx_pages_chapter_number', 'chapter_id', 'page_number'),
    )
