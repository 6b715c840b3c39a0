"""
Tests for the authoring workflow (pagebound/services/authoring_service.py)

Run: python -m pytest tests/test_authoring_service.py -q
"""

from pagebound.db.dao import ChapterDAO, PageDAO, StoryDAO, LikeDAO, CommentDAO
from pagebound.models import ErrorCode, LikeTarget, CommentTarget
from pagebound.services.authoring_service import AuthoringService
from pagebound.services.comment_service import CommentService
from pagebound.services.interaction_service import InteractionService


async def _story(session, capability, title="Demo"):
    result = await AuthoringService.create_story(session, capability, title)
    assert result.success
    return result.data["story_id"]


async def _chapter(session, capability, story_id, title="Chapter"):
    result = await AuthoringService.create_chapter(session, capability, story_id, title)
    assert result.success
    return result.data


async def _page(session, capability, chapter_id, title="Page", content="Once upon a time"):
    result = await AuthoringService.create_page(session, capability, chapter_id, title, content)
    assert result.success
    return result.data


class TestCapability:

    async def test_create_story_without_capability_is_denied(self, session, no_capability):
        result = await AuthoringService.create_story(session, no_capability, "Demo")
        assert not result.success
        assert result.error["code"] == ErrorCode.AUTHORING_NOT_ALLOWED
        assert await StoryDAO.list_stories(session) == []

    async def test_none_capability_is_denied(self, session):
        result = await AuthoringService.create_story(session, None, "Demo")
        assert result.error["code"] == ErrorCode.AUTHORING_NOT_ALLOWED

    async def test_delete_without_capability_keeps_story(self, session, capability, no_capability):
        story_id = await _story(session, capability)
        result = await AuthoringService.delete_story(session, no_capability, story_id)
        assert result.error["code"] == ErrorCode.AUTHORING_NOT_ALLOWED
        assert await StoryDAO.get_by_id(session, story_id) is not None


class TestValidation:

    async def test_blank_story_title_rejected(self, session, capability):
        result = await AuthoringService.create_story(session, capability, "   ")
        assert result.error["code"] == ErrorCode.VALIDATION_FAILED
        assert await StoryDAO.list_stories(session) == []

    async def test_blank_page_content_rejected(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        result = await AuthoringService.create_page(
            session, capability, chapter["chapter_id"], "Title", "  "
        )
        assert result.error["code"] == ErrorCode.VALIDATION_FAILED
        assert await PageDAO.count_by_chapter(session, chapter["chapter_id"]) == 0

    async def test_chapter_for_missing_story(self, session, capability):
        result = await AuthoringService.create_chapter(session, capability, "story_missing", "One")
        assert result.error["code"] == ErrorCode.STORY_NOT_FOUND

    async def test_page_for_missing_chapter(self, session, capability):
        result = await AuthoringService.create_page(session, capability, "chapter_missing", "T", "C")
        assert result.error["code"] == ErrorCode.CHAPTER_NOT_FOUND


class TestOrdinals:

    async def test_chapters_numbered_in_creation_order(self, session, capability):
        story_id = await _story(session, capability)
        for title in ("One", "Two", "Three"):
            await _chapter(session, capability, story_id, title)

        chapters = await ChapterDAO.list_by_story(session, story_id)
        assert [c.chapter_number for c in chapters] == [1, 2, 3]
        assert [c.title for c in chapters] == ["One", "Two", "Three"]

    async def test_n_pages_numbered_one_to_n(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        for i in range(5):
            await _page(session, capability, chapter["chapter_id"], title=f"P{i}")

        pages = await PageDAO.list_by_chapter(session, chapter["chapter_id"])
        assert [p.page_number for p in pages] == [1, 2, 3, 4, 5]

    async def test_deleting_middle_page_leaves_gap(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        created = [await _page(session, capability, chapter["chapter_id"]) for _ in range(4)]

        result = await AuthoringService.delete_page(session, capability, created[1]["page_id"])
        assert result.success

        pages = await PageDAO.list_by_chapter(session, chapter["chapter_id"])
        assert [p.page_number for p in pages] == [1, 3, 4]

    async def test_next_ordinal_is_count_plus_one_after_delete(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        created = [await _page(session, capability, chapter["chapter_id"]) for _ in range(3)]
        await AuthoringService.delete_page(session, capability, created[0]["page_id"])

        new_page = await _page(session, capability, chapter["chapter_id"])

        # two pages remain, so the new one is numbered 3 and collides with the old page 3
        assert new_page["page_number"] == 3
        pages = await PageDAO.list_by_chapter(session, chapter["chapter_id"])
        assert [p.page_number for p in pages] == [2, 3, 3]

    async def test_update_page_keeps_page_number(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        await _page(session, capability, chapter["chapter_id"])
        second = await _page(session, capability, chapter["chapter_id"])

        result = await AuthoringService.update_page(
            session, capability, second["page_id"], title="Renamed", content="New text"
        )
        assert result.success
        assert result.data["page_number"] == 2
        assert result.data["title"] == "Renamed"

    async def test_update_chapter_title(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id, "Old")
        result = await AuthoringService.update_chapter(session, capability, chapter["chapter_id"], "New")
        assert result.data["title"] == "New"
        assert result.data["chapter_number"] == 1


class TestCascade:

    async def test_delete_story_removes_everything(self, session, capability):
        story_id = await _story(session, capability)
        chapter = await _chapter(session, capability, story_id)
        page = await _page(session, capability, chapter["chapter_id"])

        await InteractionService.toggle_like(session, LikeTarget.STORY, story_id, "abc")
        await InteractionService.toggle_like(session, LikeTarget.PAGE, page["page_id"], "abc")
        comment = await CommentService.post_comment(
            session, CommentTarget.PAGE, page["page_id"], "Ann", "Lovely"
        )
        await InteractionService.toggle_like(
            session, LikeTarget.COMMENT, comment.data["comment_id"], "abc"
        )
        await CommentService.post_comment(session, CommentTarget.STORY, story_id, "Bob", "Nice")

        result = await AuthoringService.delete_story(session, capability, story_id)
        assert result.success

        assert await StoryDAO.get_by_id(session, story_id) is None
        assert await ChapterDAO.get_by_id(session, chapter["chapter_id"]) is None
        assert await PageDAO.get_by_id(session, page["page_id"]) is None
        assert await CommentDAO.get_by_id(session, comment.data["comment_id"]) is None
        assert await LikeDAO.count(session, LikeTarget.PAGE, page["page_id"]) == 0
        assert await LikeDAO.count(session, LikeTarget.STORY, story_id) == 0
        assert await LikeDAO.count(session, LikeTarget.COMMENT, comment.data["comment_id"]) == 0
        assert await CommentDAO.count_for_target(session, CommentTarget.STORY, story_id) == 0

    async def test_delete_chapter_keeps_other_chapters(self, session, capability):
        story_id = await _story(session, capability)
        first = await _chapter(session, capability, story_id, "One")
        second = await _chapter(session, capability, story_id, "Two")
        third = await _chapter(session, capability, story_id, "Three")
        page = await _page(session, capability, second["chapter_id"])

        await AuthoringService.delete_chapter(session, capability, second["chapter_id"])

        chapters = await ChapterDAO.list_by_story(session, story_id)
        assert [c.id for c in chapters] == [first["chapter_id"], third["chapter_id"]]
        assert [c.chapter_number for c in chapters] == [1, 3]
        assert await PageDAO.get_by_id(session, page["page_id"]) is None

    async def test_delete_missing_page(self, session, capability):
        result = await AuthoringService.delete_page(session, capability, "page_missing")
        assert result.error["code"] == ErrorCode.PAGE_NOT_FOUND


class TestImport:

    async def test_import_creates_chapters_and_pages(self, session, capability, monkeypatch):
        monkeypatch.setenv("IMPORT_WORDS_PER_PAGE", "3")
        text = "\n".join([
            "Chapter 1",
            "one two three four",
            "five six",
            "Chapter 2",
            "seven eight",
        ])

        result = await AuthoringService.import_story(session, capability, "Imported", text)

        assert result.success
        assert [c["title"] for c in result.data["chapters"]] == ["Chapter 1", "Chapter 2"]
        assert [c["chapter_number"] for c in result.data["chapters"]] == [1, 2]
        assert [c["page_count"] for c in result.data["chapters"]] == [2, 1]
        assert result.data["page_count"] == 3

        first_chapter = result.data["chapters"][0]["chapter_id"]
        pages = await PageDAO.list_by_chapter(session, first_chapter)
        assert [p.title for p in pages] == ["Page 1", "Page 2"]
        assert [p.page_number for p in pages] == [1, 2]

    async def test_import_rejects_empty_text(self, session, capability):
        result = await AuthoringService.import_story(session, capability, "Empty", "  \n ")
        assert result.error["code"] == ErrorCode.VALIDATION_FAILED
        assert await StoryDAO.list_stories(session) == []

    async def test_import_requires_capability(self, session, no_capability):
        result = await AuthoringService.import_story(session, no_capability, "X", "Chapter 1\ntext")
        assert result.error["code"] == ErrorCode.AUTHORING_NOT_ALLOWED


class TestAdminLogin:

    async def test_login_with_configured_password(self, monkeypatch):
        from pagebound.utils.auth import get_password_hash, decode_access_token, AUTHOR_SCOPE

        monkeypatch.setenv("ADMIN_PASSWORD_HASH", get_password_hash("open sesame"))
        result = await AuthoringService.admin_login("open sesame")

        assert result.success
        payload = decode_access_token(result.data["token"])
        assert payload["scope"] == AUTHOR_SCOPE

    async def test_login_with_wrong_password(self, monkeypatch):
        from pagebound.utils.auth import get_password_hash

        monkeypatch.setenv("ADMIN_PASSWORD_HASH", get_password_hash("open sesame"))
        result = await AuthoringService.admin_login("guess")
        assert result.error["code"] == ErrorCode.INVALID_PASSWORD

    async def test_login_fails_when_no_hash_configured(self, monkeypatch):
        monkeypatch.setenv("ADMIN_PASSWORD_HASH", "")
        result = await AuthoringService.admin_login("anything")
        assert result.error["code"] == ErrorCode.INVALID_PASSWORD


class TestSampleStory:

    async def test_generated_story_is_pinned_with_counters(self, session, capability):
        import random
        from pagebound.services.story_templates import COUNTER_RANGES, TITLE_VARIATIONS

        result = await AuthoringService.generate_sample_story(
            session, capability, template_index=3, rng=random.Random(7)
        )

        assert result.success
        story = await StoryDAO.get_by_id(session, result.data["story_id"])
        assert story.is_pinned and story.auto_generated
        assert result.data["is_pinned"] is True
        assert story.title.endswith(" Ghosts")
        assert story.title.rsplit(" ", 1)[0] in TITLE_VARIATIONS
        for name, (low, high) in COUNTER_RANGES.items():
            assert low <= getattr(story, name) <= high
        assert story.cover_image_url.startswith("https://picsum.photos/400/600?random=")

    async def test_template_paragraphs_become_pages(self, session, capability):
        result = await AuthoringService.generate_sample_story(session, capability, template_index=3)

        chapters = await ChapterDAO.list_by_story(session, result.data["story_id"])
        pages = await PageDAO.list_by_chapter(session, chapters[0].id)

        assert [c.title for c in chapters] == ["Chapter 1: The Glitch"]
        assert [p.page_number for p in pages] == [1, 2, 3, 4, 5]
        assert [p.title for p in pages][:2] == ["Opening", "Page 2"]
        assert pages[2].content == "'HELP US. WE REMEMBER EVERYTHING.'"
        assert result.data["page_count"] == 5
        assert result.data["genre"] == "Thriller"

    async def test_unknown_template_rejected(self, session, capability):
        result = await AuthoringService.generate_sample_story(session, capability, template_index=99)
        assert result.error["code"] == ErrorCode.VALIDATION_FAILED
        assert await StoryDAO.list_stories(session) == []

    async def test_requires_capability(self, session, no_capability):
        result = await AuthoringService.generate_sample_story(session, no_capability)
        assert result.error["code"] == ErrorCode.AUTHORING_NOT_ALLOWED
        assert await StoryDAO.list_stories(session) == []

    async def test_plain_stories_are_not_pinned(self, session, capability):
        story_id = await _story(session, capability)
        story = await StoryDAO.get_by_id(session, story_id)
        assert story.is_pinned is False
        assert story.auto_generated is False
