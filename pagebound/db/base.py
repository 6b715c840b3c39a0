"""
数据库引擎

声明式基类、连接地址解析、引擎与会话工厂的创建和释放
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from pagebound.config.settings import settings

Base = declarative_base()

# init_db() 之前均为 None
async_engine: AsyncEngine = None
AsyncSessionLocal: async_sessionmaker = None


def get_database_url(async_mode: bool = True) -> str:
    """
    解析数据库连接地址

    postgresql:// 在异步模式下改写为 postgresql+asyncpg://，
    其他驱动（如 sqlite+aiosqlite）原样返回
    """
    url = settings.DATABASE_URL
    if not url:
        raise RuntimeError("Database is disabled or DATABASE_URL is empty")

    if async_mode and url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DEBUG}
    # sqlite 使用单连接池，不接受 pool_size / max_overflow
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
        options["pool_pre_ping"] = True
    return options


async def init_db():
    """创建引擎与会话工厂（数据库未启用时跳过）"""
    global async_engine, AsyncSessionLocal

    if not settings.DATABASE_ENABLED:
        return

    url = get_database_url(async_mode=True)
    async_engine = create_async_engine(url, **_engine_options(url))
    AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    """按 ORM 模型建表（已存在的表不受影响）"""
    # 注册全部模型到 Base.metadata
    from pagebound.db import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """释放连接池"""
    global async_engine, AsyncSessionLocal

    if async_engine is not None:
        await async_engine.dispose()
    async_engine = None
    AsyncSessionLocal = None
