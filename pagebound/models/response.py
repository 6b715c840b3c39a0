"""
统一响应模型
"""

from typing import Any, Generic, TypeVar, Optional
from pydantic import BaseModel, Field


T = TypeVar('T')


class ErrorCode:
    """业务错误码"""
    # 不存在
    STORY_NOT_FOUND = "STORY_NOT_FOUND"
    CHAPTER_NOT_FOUND = "CHAPTER_NOT_FOUND"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"

    # 参数校验
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # 约束冲突
    ALREADY_LIKED = "ALREADY_LIKED"

    # 权限
    AUTHORING_NOT_ALLOWED = "AUTHORING_NOT_ALLOWED"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    SESSION_REQUIRED = "SESSION_REQUIRED"

    # 后端不可用
    QUERY_FAILED = "QUERY_FAILED"
    DATABASE_DISABLED = "DATABASE_DISABLED"


class ApiResponse(BaseModel, Generic[T]):
    """统一API响应格式"""
    success: bool = Field(True, description="请求是否成功")
    data: Optional[T] = Field(None, description="响应数据")
    message: Optional[str] = Field(None, description="响应消息")
    code: Optional[int] = Field(None, description="业务错误码")
    error: Optional[dict] = Field(None, description="错误详情")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {"key": "value"},
                "message": "操作成功"
            }
        }


def error_response(code: str, message: str, detail: str) -> ApiResponse:
    """
    构造失败响应

    Args:
        code: 业务错误码（ErrorCode）
        message: 英文消息
        detail: 面向用户的提示
    """
    return ApiResponse(
        success=False,
        message=message,
        error={"code": code, "message": detail}
    )
