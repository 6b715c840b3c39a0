"""
数据库会话

get_session 用于脚本与导入任务，get_db 是 FastAPI 依赖使用的同一套
事务边界：正常结束提交，出现异常回滚后继续抛出
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.db import base


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    单事务会话

    用法：
        async with get_session() as session:
            await StoryDAO.list_stories(session)
    """
    if base.AsyncSessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with base.AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncIterator[AsyncSession]:
    """请求级会话（依赖注入用）"""
    async with get_session() as session:
        yield session
