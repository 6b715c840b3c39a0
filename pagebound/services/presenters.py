"""
ORM 对象 -> 响应字典
"""

from typing import Optional, List, Dict, Any

from pagebound.db.models import Story, Chapter, Page, Comment
from pagebound.utils.content import split_content_segments


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def story_to_dict(
    story: Story,
    like_count: Optional[int] = None,
    comment_count: Optional[int] = None,
    is_liked: bool = False
) -> Dict[str, Any]:
    """故事摘要；like_count / comment_count 为展示值（基数 + 真实数）"""
    return {
        "story_id": story.id,
        "title": story.title,
        "description": story.description,
        "cover_image_url": story.cover_image_url,
        "reads": story.fake_reads or 0,
        "like_count": like_count if like_count is not None else (story.fake_likes or 0),
        "comment_count": comment_count if comment_count is not None else (story.fake_comments or 0),
        "is_liked": is_liked,
        "is_pinned": bool(story.is_pinned),
        "auto_generated": bool(story.auto_generated),
        "created_at": _iso(story.created_at),
        "updated_at": _iso(story.updated_at),
    }


def chapter_to_dict(chapter: Chapter, page_count: Optional[int] = None) -> Dict[str, Any]:
    data = {
        "chapter_id": chapter.id,
        "story_id": chapter.story_id,
        "chapter_number": chapter.chapter_number,
        "title": chapter.title,
        "created_at": _iso(chapter.created_at),
    }
    if page_count is not None:
        data["page_count"] = page_count
    return data


def page_to_dict(page: Page, with_segments: bool = False) -> Dict[str, Any]:
    data = {
        "page_id": page.id,
        "chapter_id": page.chapter_id,
        "page_number": page.page_number,
        "title": page.title,
        "content": page.content,
        "image_url": page.image_url,
        "created_at": _iso(page.created_at),
    }
    if with_segments:
        data["segments"] = split_content_segments(page.content)
    return data


def comment_to_dict(
    comment: Comment,
    like_count: int = 0,
    is_liked: bool = False,
    reply_count: int = 0,
    replies: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    return {
        "comment_id": comment.id,
        "target_type": comment.target_type,
        "target_id": comment.story_id or comment.page_id,
        "parent_comment_id": comment.parent_comment_id,
        "user_name": comment.user_name,
        "content": comment.content,
        "like_count": like_count,
        "is_liked": is_liked,
        "reply_count": reply_count,
        "replies": replies or [],
        "created_at": _iso(comment.created_at),
    }
