"""
章节与页面相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, Field


class ChapterCreate(BaseModel):
    """创建章节请求（序号由服务端分配）"""
    title: str = Field(..., max_length=256, description="章节标题")


class ChapterUpdate(BaseModel):
    """修改章节请求"""
    title: str = Field(..., max_length=256, description="章节标题")


class PageCreate(BaseModel):
    """创建页面请求（页码由服务端分配）"""
    title: str = Field(..., max_length=256, description="页面标题")
    content: str = Field(..., description="正文")
    image_url: Optional[str] = Field(None, max_length=512, description="配图URL")


class PageUpdate(BaseModel):
    """修改页面请求（未提供的字段保持不变，页码不可修改）"""
    title: Optional[str] = Field(None, max_length=256, description="页面标题")
    content: Optional[str] = Field(None, description="正文")
    image_url: Optional[str] = Field(None, max_length=512, description="配图URL")
