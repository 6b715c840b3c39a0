"""
工具模块
"""

from .auth import create_access_token, verify_password, get_password_hash, decode_access_token, AUTHOR_SCOPE
from .id_generator import (
    generate_ulid, generate_story_id, generate_chapter_id, generate_page_id,
    generate_comment_id, generate_like_id, generate_reader_session_id
)
from .content import extract_image_urls, split_content_segments, estimate_reading_minutes
from .text_splitter import SplitChapter, SplitPage, split_text_into_chapters, is_chapter_heading

__all__ = [
    # 认证工具
    "create_access_token",
    "verify_password",
    "get_password_hash",
    "decode_access_token",
    "AUTHOR_SCOPE",

    # ID 生成器
    "generate_ulid",
    "generate_story_id",
    "generate_chapter_id",
    "generate_page_id",
    "generate_comment_id",
    "generate_like_id",
    "generate_reader_session_id",

    # 正文处理
    "extract_image_urls",
    "split_content_segments",
    "estimate_reading_minutes",

    # 文本切分
    "SplitChapter",
    "SplitPage",
    "split_text_into_chapters",
    "is_chapter_heading",
]
