"""
故事展示计数（fake_reads / fake_likes / fake_comments）

读-改-写且非原子，并发下会丢失更新；计数只用于展示，
不作为任何正确性依据
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.config.settings import settings
from pagebound.db.dao import StoryDAO


async def bump_story_counter(session: AsyncSession, story_id: str, field: str):
    """尽力累加故事的展示计数，失败只记录日志"""
    if not settings.BUMP_STORY_COUNTERS:
        return

    try:
        async with session.begin_nested():
            await StoryDAO.bump_counter(session, story_id, field)
    except SQLAlchemyError as e:
        logger.warning(f"⚠️  Counter bump {field} failed for {story_id}: {e}")
