"""
数据库模块

包含 SQLAlchemy ORM 模型、数据库连接管理等
"""

from .base import Base, init_db, close_db, create_tables
from .session import get_db, get_session

__all__ = [
    "Base",
    "init_db",
    "close_db",
    "create_tables",
    "get_db",
    "get_session",
]
