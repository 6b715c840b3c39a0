"""
阅读会话与阅读器配置路由
"""

from fastapi import APIRouter, Depends

from pagebound.models import ApiResponse, ReaderConfig, ReaderSession
from pagebound.api.deps import get_reader_session
from pagebound.services.navigation_service import reading_cursors
from pagebound.config.settings import settings
from pagebound.utils.id_generator import generate_reader_session_id

router = APIRouter()


@router.post("/session", response_model=ApiResponse)
async def create_reader_session():
    """
    签发匿名阅读会话ID

    - 客户端保存后通过 X-Reader-Session 请求头携带
    - 点赞去重只依赖该会话ID
    """
    return ApiResponse(
        success=True,
        message="Reader session created",
        data={"session_id": generate_reader_session_id()}
    )


@router.get("/reader/config", response_model=ApiResponse)
async def get_reader_config():
    """阅读器功能开关（评论嵌套、字号、阅读速度）"""
    config = ReaderConfig(
        comments_nested=settings.COMMENTS_NESTED,
        comment_display_depth=settings.COMMENT_DISPLAY_DEPTH,
        text_size_controls=settings.TEXT_SIZE_CONTROLS,
        reading_speed_controls=settings.READING_SPEED_CONTROLS,
        words_per_minute=settings.WORDS_PER_MINUTE,
    )
    return ApiResponse(success=True, data=config.model_dump())


@router.get("/reader/position", response_model=ApiResponse)
async def get_reading_position(reader: ReaderSession = Depends(get_reader_session)):
    """当前会话最近一次被应用的翻页结果（尚未翻页时为 null）"""
    cursor = reading_cursors.peek(reader.session_id)
    return ApiResponse(
        success=True,
        message=None if cursor and cursor.state else "No reading position yet",
        data={"position": cursor.state if cursor else None}
    )
