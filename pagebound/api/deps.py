"""
API 依赖注入 - 数据库连接、匿名阅读会话、创作权限
"""

from typing import Optional, AsyncIterator
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.config import settings
from pagebound.db.session import get_db
from pagebound.models import ApiResponse, ErrorCode, AuthoringCapability, ReaderSession
from pagebound.utils.auth import decode_access_token, AUTHOR_SCOPE

# 管理员 token（可选，缺失时得到无权限的能力标记）
security = HTTPBearer(auto_error=False)

# 业务错误码 -> HTTP 状态码
_ERROR_STATUS = {
    ErrorCode.STORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHAPTER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.COMMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PARENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.ALREADY_LIKED: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTHORING_NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.QUERY_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.DATABASE_DISABLED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_error(result: ApiResponse) -> ApiResponse:
    """
    将失败的服务结果转换为 HTTPException

    Args:
        result: 服务层返回的响应

    Returns:
        成功时原样返回
    """
    if result.success:
        return result

    code = (result.error or {}).get("code")
    raise HTTPException(
        status_code=_ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST),
        detail=result.error
    )


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话（依赖注入用）

    Yields:
        AsyncSession: 数据库会话
    """
    if not settings.DATABASE_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"code": ErrorCode.DATABASE_DISABLED, "message": "数据库未启用"}
        )

    async for session in get_db():
        yield session


async def get_reader_session_optional(
    x_reader_session: Optional[str] = Header(None)
) -> Optional[ReaderSession]:
    """从 X-Reader-Session 请求头读取匿名会话（可选）"""
    session_id = (x_reader_session or "").strip()
    if not session_id:
        return None
    return ReaderSession(session_id=session_id)


async def get_reader_session(
    reader: Optional[ReaderSession] = Depends(get_reader_session_optional)
) -> ReaderSession:
    """
    必需的匿名会话（点赞等写操作）

    Returns:
        ReaderSession
    """
    if reader is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": ErrorCode.SESSION_REQUIRED, "message": "缺少阅读会话，请先获取会话ID"}
        )
    return reader


async def get_authoring_capability(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthoringCapability:
    """
    从管理员 token 解析创作权限

    token 缺失、无效或不带 author 权限范围时返回无权限的标记，
    由创作服务统一拒绝
    """
    if not credentials:
        return AuthoringCapability()

    payload = decode_access_token(credentials.credentials)
    if not payload or payload.get("scope") != AUTHOR_SCOPE:
        return AuthoringCapability()

    return AuthoringCapability(granted=True, subject=payload.get("sub"))
