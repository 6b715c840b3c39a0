"""
实体 ID

所有主键都是 "<前缀>_<ULID>"：前缀标明实体类型，ULID 保证按创建时间有序，
便于在日志和接口返回里一眼认出 ID 属于哪张表
"""

import ulid

STORY_PREFIX = "story"
CHAPTER_PREFIX = "chapter"
PAGE_PREFIX = "page"
COMMENT_PREFIX = "comment"
LIKE_PREFIX = "like"
SESSION_PREFIX = "session"


def generate_ulid() -> str:
    """26 位、按时间可排序的 ULID 字符串"""
    return str(ulid.new())


def prefixed_id(prefix: str) -> str:
    return f"{prefix}_{generate_ulid()}"


def generate_story_id() -> str:
    return prefixed_id(STORY_PREFIX)


def generate_chapter_id() -> str:
    return prefixed_id(CHAPTER_PREFIX)


def generate_page_id() -> str:
    return prefixed_id(PAGE_PREFIX)


def generate_comment_id() -> str:
    return prefixed_id(COMMENT_PREFIX)


def generate_like_id() -> str:
    """点赞记录 ID，三种点赞表共用同一前缀"""
    return prefixed_id(LIKE_PREFIX)


def generate_reader_session_id() -> str:
    """
    匿名阅读会话 ID

    客户端首次访问时领取并自行保存，之后通过 X-Reader-Session 头带回
    """
    return prefixed_id(SESSION_PREFIX)
