"""
正文渲染辅助

正文中以图片扩展名结尾的 http(s) 链接在展示时作为内嵌图片处理，
存储层不做特殊处理
"""

import re
from typing import List, Dict

IMAGE_URL_PATTERN = re.compile(r"(https?://[^\s]+\.(?:jpg|jpeg|png|gif|webp))", re.IGNORECASE)


def extract_image_urls(content: str) -> List[str]:
    """提取正文中的所有内嵌图片链接"""
    if not content:
        return []
    return IMAGE_URL_PATTERN.findall(content)


def split_content_segments(content: str) -> List[Dict[str, str]]:
    """
    将正文切分为文本段与图片段

    Args:
        content: 页面正文

    Returns:
        [{"type": "text" | "image", "value": ...}, ...]，保持原文顺序，
        空白文本段会被丢弃
    """
    segments = []
    if not content:
        return segments

    position = 0
    for match in IMAGE_URL_PATTERN.finditer(content):
        text = content[position:match.start()]
        if text.strip():
            segments.append({"type": "text", "value": text})
        segments.append({"type": "image", "value": match.group(1)})
        position = match.end()

    tail = content[position:]
    if tail.strip():
        segments.append({"type": "text", "value": tail})

    return segments


def estimate_reading_minutes(content: str, words_per_minute: int) -> int:
    """估算阅读时长（分钟，至少 1 分钟）"""
    words = len(content.split()) if content else 0
    if words_per_minute <= 0:
        return 1
    return max(1, -(-words // words_per_minute))
