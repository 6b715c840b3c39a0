"""
互动相关数据模型（点赞、评论）
"""

from typing import Optional
from pydantic import BaseModel, Field
from enum import Enum


class LikeTarget(str, Enum):
    """点赞目标类型"""
    STORY = "story"
    PAGE = "page"
    COMMENT = "comment"


class CommentTarget(str, Enum):
    """评论目标类型"""
    STORY = "story"
    PAGE = "page"


class CommentCreate(BaseModel):
    """发表评论请求"""
    user_name: str = Field(..., max_length=64, description="昵称")
    content: str = Field(..., description="评论内容（去除首尾空白后最多 2000 字符，由服务层校验）")
    parent_comment_id: Optional[str] = Field(None, description="父评论ID（回复）")
