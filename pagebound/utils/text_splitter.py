"""
纯文本 → 章节/页面 切分

朴素启发式：
- 以 "Chapter N" 开头的行，或长度适中、与其大写形式相同的行视为章节标题
  （不含字母的分隔行如 "* * * * * *" 也算）
- 正文按词数切页（默认约 500 词一页）
- 全文找不到章节标题时，整篇作为 "Chapter 1" 按词数切页
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

CHAPTER_HEADING_PATTERN = re.compile(r"^Chapter\s+\d+", re.IGNORECASE)


@dataclass
class SplitPage:
    title: str
    content: str


@dataclass
class SplitChapter:
    title: str
    pages: List[SplitPage] = field(default_factory=list)

    def add_page(self, content: str):
        self.pages.append(SplitPage(title=f"Page {len(self.pages) + 1}", content=content))


def is_chapter_heading(line: str, min_length: int = 5, max_length: int = 50) -> bool:
    """
    判断一行是否为章节标题

    Args:
        line: 已去除首尾空白的行
        min_length: 全大写标题的最小长度（不含）
        max_length: 全大写标题的最大长度（不含）
    """
    if CHAPTER_HEADING_PATTERN.match(line):
        return True
    return min_length < len(line) < max_length and line == line.upper()


def _paginate_words(words: List[str], words_per_page: int) -> List[str]:
    return [
        " ".join(words[start:start + words_per_page])
        for start in range(0, len(words), words_per_page)
    ]


def split_text_into_chapters(
    text: str,
    words_per_page: int = 500,
    heading_min_length: int = 5,
    heading_max_length: int = 50
) -> List[SplitChapter]:
    """
    将纯文本切分为章节和页面

    Args:
        text: 原始文本
        words_per_page: 每页词数上限，超过后换页
        heading_min_length: 全大写标题最小长度
        heading_max_length: 全大写标题最大长度

    Returns:
        章节列表（按出现顺序），每章的页面按顺序排列
    """
    if words_per_page < 1:
        raise ValueError("words_per_page must be positive")

    chapters: List[SplitChapter] = []
    current: Optional[SplitChapter] = None
    buffer: List[str] = []
    buffered_words = 0

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if is_chapter_heading(line, heading_min_length, heading_max_length):
            # 收尾上一页；第一个标题之前的文字没有归属章节，直接丢弃
            if current is not None and buffer:
                current.add_page("\n".join(buffer))
            current = SplitChapter(title=line)
            chapters.append(current)
            buffer = []
            buffered_words = 0
            continue

        buffer.append(raw_line.rstrip())
        buffered_words += len(line.split())

        if current is not None and buffered_words > words_per_page:
            current.add_page("\n".join(buffer))
            buffer = []
            buffered_words = 0

    if current is not None and buffer:
        current.add_page("\n".join(buffer))

    # 没有识别到任何章节：整篇作为第一章
    if not chapters:
        fallback = SplitChapter(title="Chapter 1")
        for content in _paginate_words((text or "").split(), words_per_page):
            fallback.add_page(content)
        chapters.append(fallback)

    return chapters
