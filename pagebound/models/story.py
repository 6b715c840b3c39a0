"""
故事相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, Field


class StoryCreate(BaseModel):
    """创建故事请求"""
    title: str = Field(..., max_length=256, description="故事标题")
    description: Optional[str] = Field(None, description="故事简介")
    cover_image_url: Optional[str] = Field(None, max_length=512, description="封面URL")


class StoryUpdate(BaseModel):
    """修改故事请求（未提供的字段保持不变）"""
    title: Optional[str] = Field(None, max_length=256, description="故事标题")
    description: Optional[str] = Field(None, description="故事简介")
    cover_image_url: Optional[str] = Field(None, max_length=512, description="封面URL")


class StoryImport(StoryCreate):
    """从纯文本导入故事"""
    source_text: str = Field(..., description="已提取的原文文本")
