"""
阅读会话、导航与管理员授权相关数据模型
"""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, Field
from enum import Enum


class Direction(str, Enum):
    """翻页方向"""
    NEXT = "next"
    PREV = "prev"


@dataclass(frozen=True)
class ReaderSession:
    """匿名阅读会话（点赞去重的唯一身份）"""
    session_id: str


@dataclass(frozen=True)
class AuthoringCapability:
    """
    创作权限标记

    共享口令换来的能力标记，显式传入创作服务；不是安全边界
    """
    granted: bool = False
    subject: Optional[str] = None


class AdminLogin(BaseModel):
    """管理员登录请求"""
    password: str = Field(..., min_length=1, description="管理口令")


class ReaderConfig(BaseModel):
    """阅读器功能开关"""
    comments_nested: bool
    comment_display_depth: int
    text_size_controls: bool
    reading_speed_controls: bool
    words_per_minute: int
