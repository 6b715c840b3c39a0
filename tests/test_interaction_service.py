"""
Tests for like toggling (pagebound/services/interaction_service.py)

Run: python -m pytest tests/test_interaction_service.py -q
"""

import pytest_asyncio

from pagebound.db.dao import LikeDAO, StoryDAO
from pagebound.models import ErrorCode, LikeTarget, CommentTarget
from pagebound.services.authoring_service import AuthoringService
from pagebound.services.comment_service import CommentService
from pagebound.services.interaction_service import InteractionService


@pytest_asyncio.fixture
async def page_ids(session, capability):
    story = await AuthoringService.create_story(session, capability, "Demo")
    chapter = await AuthoringService.create_chapter(session, capability, story.data["story_id"], "One")
    page = await AuthoringService.create_page(
        session, capability, chapter.data["chapter_id"], "Page 1", "Hello"
    )
    return story.data["story_id"], page.data["page_id"]


class TestToggleLike:

    async def test_toggle_twice_restores_state(self, session, page_ids):
        _, page_id = page_ids
        before = await InteractionService.get_like_status(session, LikeTarget.PAGE, page_id, "abc")

        liked = await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")
        assert liked.data["is_liked"] is True
        assert liked.data["like_count"] == before.data["like_count"] + 1

        unliked = await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")
        assert unliked.data["is_liked"] is False
        assert unliked.data["like_count"] == before.data["like_count"]

    async def test_two_sessions_give_two_likes(self, session, page_ids):
        _, page_id = page_ids
        await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")
        result = await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "xyz")

        assert result.data["like_count"] == 2
        assert await LikeDAO.count(session, LikeTarget.PAGE, page_id) == 2
        assert await LikeDAO.find(session, LikeTarget.PAGE, page_id, "abc") is not None
        assert await LikeDAO.find(session, LikeTarget.PAGE, page_id, "xyz") is not None

    async def test_page_like_bumps_story_counter(self, session, page_ids):
        story_id, page_id = page_ids
        await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")
        story = await StoryDAO.get_by_id(session, story_id)
        assert story.fake_likes == 1

    async def test_story_like_count_includes_base(self, session, page_ids):
        story_id, _ = page_ids
        await StoryDAO.bump_counter(session, story_id, "fake_likes", 10)

        result = await InteractionService.toggle_like(session, LikeTarget.STORY, story_id, "abc")
        assert result.data["like_count"] == 11
        result = await InteractionService.toggle_like(session, LikeTarget.STORY, story_id, "abc")
        assert result.data["like_count"] == 10

    async def test_comment_like(self, session, page_ids):
        _, page_id = page_ids
        comment = await CommentService.post_comment(session, CommentTarget.PAGE, page_id, "Ann", "Hi")
        comment_id = comment.data["comment_id"]

        result = await InteractionService.toggle_like(session, LikeTarget.COMMENT, comment_id, "abc")
        assert result.data == {
            "target_type": "comment",
            "target_id": comment_id,
            "is_liked": True,
            "like_count": 1,
        }

    async def test_duplicate_insert_is_absorbed(self, session, page_ids):
        _, page_id = page_ids
        assert await LikeDAO.add(session, LikeTarget.PAGE, page_id, "abc") is True
        assert await LikeDAO.add(session, LikeTarget.PAGE, page_id, "abc") is False
        assert await LikeDAO.count(session, LikeTarget.PAGE, page_id) == 1

    async def test_missing_target(self, session):
        result = await InteractionService.toggle_like(session, LikeTarget.PAGE, "page_missing", "abc")
        assert result.error["code"] == ErrorCode.PAGE_NOT_FOUND

        result = await InteractionService.toggle_like(session, LikeTarget.COMMENT, "comment_missing", "abc")
        assert result.error["code"] == ErrorCode.COMMENT_NOT_FOUND


class TestLikeStatus:

    async def test_status_without_session(self, session, page_ids):
        _, page_id = page_ids
        await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")

        result = await InteractionService.get_like_status(session, LikeTarget.PAGE, page_id, None)
        assert result.data["is_liked"] is False
        assert result.data["like_count"] == 1

    async def test_status_with_session(self, session, page_ids):
        _, page_id = page_ids
        await InteractionService.toggle_like(session, LikeTarget.PAGE, page_id, "abc")

        result = await InteractionService.get_like_status(session, LikeTarget.PAGE, page_id, "abc")
        assert result.data["is_liked"] is True
