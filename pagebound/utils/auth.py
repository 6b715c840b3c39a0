"""
管理员认证

只有一个管理员身份：口令与 config 中的 pbkdf2 哈希比对，通过后签发带
author 权限范围的 JWT，创作接口凭此 token 获得创作权限
"""

from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from pagebound.config.settings import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# 管理员 token 的 scope 声明
AUTHOR_SCOPE = "author"


def get_password_hash(password: str) -> str:
    """生成可写入 ADMIN_PASSWORD_HASH 的口令哈希"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    比对口令与哈希

    任一方为空时返回 False，即未配置哈希的部署无法登录；
    无法识别的哈希格式同样视为不匹配
    """
    if not (plain_password and hashed_password):
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    签发 JWT

    Args:
        data: 声明（通常为 sub 与 scope）
        expires_delta: 有效期，缺省取 JWT_EXPIRE_MINUTES

    Returns:
        编码后的 token
    """
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.utcnow() + lifetime}
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """校验并解码 token；签名错误、过期或格式不对都返回 None"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
