"""
Tests for page navigation (pagebound/services/navigation_service.py)

Run: python -m pytest tests/test_navigation_service.py -q
"""

from types import SimpleNamespace

from pagebound.models import Direction, ErrorCode
from pagebound.services.authoring_service import AuthoringService
from pagebound.services.navigation_service import (
    NavigationService, ReadingCursor, ReadingCursorRegistry, resolve_neighbor
)


async def _build_story(session, capability, layout, title="Demo"):
    """
    Create a story whose chapters hold the given number of pages.

    Returns a list of lists of page ids, one list per chapter.
    """
    story = await AuthoringService.create_story(session, capability, title)
    page_ids = []
    for chapter_index, page_count in enumerate(layout, start=1):
        chapter = await AuthoringService.create_chapter(
            session, capability, story.data["story_id"], f"Chapter {chapter_index}"
        )
        ids = []
        for page_index in range(1, page_count + 1):
            page = await AuthoringService.create_page(
                session, capability, chapter.data["chapter_id"],
                f"Page {page_index}", f"Text of {chapter_index}/{page_index}"
            )
            ids.append(page.data["page_id"])
        page_ids.append(ids)
    return page_ids


class TestNavigate:

    async def test_demo_story_crosses_chapter_then_ends(self, session, capability):
        pages = await _build_story(session, capability, [2, 1])

        result = await NavigationService.navigate(session, pages[0][1], Direction.NEXT)
        assert result.success
        assert result.data["end_of_story"] is False
        assert result.data["chapter"]["chapter_number"] == 2
        assert result.data["page"]["page_number"] == 1
        assert result.data["page"]["page_id"] == pages[1][0]

        result = await NavigationService.navigate(session, pages[1][0], Direction.NEXT)
        assert result.success
        assert result.data["end_of_story"] is True
        assert result.data["page"] is None

    async def test_next_within_chapter(self, session, capability):
        pages = await _build_story(session, capability, [3])
        result = await NavigationService.navigate(session, pages[0][0], Direction.NEXT)
        assert result.data["page"]["page_id"] == pages[0][1]

    async def test_prev_lands_on_last_page_of_previous_chapter(self, session, capability):
        pages = await _build_story(session, capability, [3, 2])
        result = await NavigationService.navigate(session, pages[1][0], Direction.PREV)
        assert result.data["page"]["page_id"] == pages[0][2]
        assert result.data["chapter"]["chapter_number"] == 1

    async def test_prev_from_first_page_is_beginning(self, session, capability):
        pages = await _build_story(session, capability, [2])
        result = await NavigationService.navigate(session, pages[0][0], Direction.PREV)
        assert result.success
        assert result.data["end_of_story"] is True
        assert result.data["page"] is None

    async def test_empty_chapters_are_skipped(self, session, capability):
        pages = await _build_story(session, capability, [1, 0, 0, 2])

        forward = await NavigationService.navigate(session, pages[0][0], Direction.NEXT)
        assert forward.data["page"]["page_id"] == pages[3][0]
        assert forward.data["chapter"]["chapter_number"] == 4

        backward = await NavigationService.navigate(session, pages[3][0], Direction.PREV)
        assert backward.data["page"]["page_id"] == pages[0][0]

    async def test_trailing_empty_chapter_is_end_of_story(self, session, capability):
        pages = await _build_story(session, capability, [1, 0])
        result = await NavigationService.navigate(session, pages[0][0], Direction.NEXT)
        assert result.data["end_of_story"] is True

    async def test_missing_page(self, session):
        result = await NavigationService.navigate(session, "page_missing", Direction.NEXT)
        assert result.error["code"] == ErrorCode.PAGE_NOT_FOUND

    async def test_cursor_records_latest_result(self, session, capability):
        pages = await _build_story(session, capability, [3])
        cursor = ReadingCursor()

        result = await NavigationService.navigate(session, pages[0][0], Direction.NEXT, cursor)

        assert result.data["applied"] is True
        assert cursor.state["page"]["page_id"] == pages[0][1]


class TestResolveNeighbor:

    @staticmethod
    def _chapter(chapter_id):
        return SimpleNamespace(id=chapter_id)

    @staticmethod
    def _page(page_id, chapter_id, number):
        return SimpleNamespace(id=page_id, chapter_id=chapter_id, page_number=number)

    async def test_stale_page_list_falls_back_to_page_number(self):
        chapter = self._chapter("c1")
        current = self._page("p2", "c1", 2)
        # current page no longer in the loaded list
        pages = [self._page("p1", "c1", 1), self._page("p3", "c1", 3)]

        async def load_pages(_):
            return []

        chapter_found, page = await resolve_neighbor(current, pages, [chapter], load_pages, Direction.NEXT)
        assert page.id == "p3"
        assert chapter_found is chapter

        _, page = await resolve_neighbor(current, pages, [chapter], load_pages, Direction.PREV)
        assert page.id == "p1"

    async def test_loader_called_only_when_crossing(self):
        chapters = [self._chapter("c1"), self._chapter("c2")]
        pages = [self._page("p1", "c1", 1), self._page("p2", "c1", 2)]
        loaded = []

        async def load_pages(chapter):
            loaded.append(chapter.id)
            return [self._page("q1", "c2", 1)]

        _, page = await resolve_neighbor(pages[0], pages, chapters, load_pages, Direction.NEXT)
        assert page.id == "p2"
        assert loaded == []

        _, page = await resolve_neighbor(pages[1], pages, chapters, load_pages, Direction.NEXT)
        assert page.id == "q1"
        assert loaded == ["c2"]


class TestReadingCursor:

    def test_late_result_does_not_overwrite_newer_navigation(self):
        cursor = ReadingCursor()
        first = cursor.begin()
        second = cursor.begin()

        assert cursor.apply(second, {"page": "newer"}) is True
        assert cursor.apply(first, {"page": "older"}) is False
        assert cursor.state == {"page": "newer"}

    def test_only_latest_ticket_is_current(self):
        cursor = ReadingCursor()
        first = cursor.begin()
        assert cursor.is_current(first)
        second = cursor.begin()
        assert not cursor.is_current(first)
        assert cursor.is_current(second)


class TestReadingCursorRegistry:

    def test_same_session_gets_same_cursor(self):
        registry = ReadingCursorRegistry()
        assert registry.get("abc") is registry.get("abc")
        assert registry.get("abc") is not registry.get("xyz")

    def test_peek_does_not_create(self):
        registry = ReadingCursorRegistry()
        assert registry.peek("abc") is None
        assert len(registry) == 0

    def test_least_recently_used_session_evicted(self):
        registry = ReadingCursorRegistry(max_readers=2)
        first = registry.get("a")
        registry.get("b")
        registry.get("a")
        registry.get("c")

        assert registry.peek("b") is None
        assert registry.peek("a") is first
        assert len(registry) == 2
