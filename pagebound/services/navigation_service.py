"""
翻页导航服务

在章节内前后翻页，到达章节边界时跨到相邻章节；空章节被跳过，
走到故事尽头时返回 end_of_story 而不是错误
"""

from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.models import ApiResponse, ErrorCode, error_response, Direction
from pagebound.db.dao import ChapterDAO, PageDAO
from pagebound.db.models import Chapter, Page
from pagebound.services.presenters import chapter_to_dict, page_to_dict

PageLoader = Callable[[Chapter], Awaitable[List[Page]]]


def _index_of(items: Sequence[Any], item_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


def _fallback_page_index(current_page: Page, pages: Sequence[Page], step: int) -> int:
    # 当前页不在已加载列表中（列表过期），按页码定位插入位置
    if step > 0:
        before = [p for p in pages if p.page_number <= current_page.page_number]
        return len(before) - 1
    after = [p for p in pages if p.page_number < current_page.page_number]
    return len(after)


async def resolve_neighbor(
    current_page: Page,
    pages: Sequence[Page],
    chapters: Sequence[Chapter],
    load_pages: PageLoader,
    direction: Direction
) -> Optional[Tuple[Chapter, Page]]:
    """
    计算相邻页面

    Args:
        current_page: 当前页面
        pages: 当前章节的页面列表（按页码升序）
        chapters: 故事的章节列表（按序号升序）
        load_pages: 加载某章节页面列表的协程函数
        direction: 翻页方向

    Returns:
        (章节, 页面)；没有更多内容时返回 None
    """
    step = 1 if Direction(direction) == Direction.NEXT else -1

    index = _index_of(pages, current_page.id)
    if index is None:
        index = _fallback_page_index(current_page, pages, step)

    neighbor = index + step
    chapter_index = _index_of(chapters, current_page.chapter_id)

    if 0 <= neighbor < len(pages):
        chapter = chapters[chapter_index] if chapter_index is not None else None
        return chapter, pages[neighbor]

    if chapter_index is None:
        return None

    # 跨章节，跳过没有页面的章节
    chapter_index += step
    while 0 <= chapter_index < len(chapters):
        chapter = chapters[chapter_index]
        chapter_pages = await load_pages(chapter)
        if chapter_pages:
            return chapter, chapter_pages[0] if step > 0 else chapter_pages[-1]
        chapter_index += step

    return None


class ReadingCursor:
    """
    翻页结果守卫

    每次发起导航领取一个递增票据，只有最新票据的结果才会被应用，
    较晚返回的旧结果不会覆盖新的阅读位置
    """

    def __init__(self):
        self._issued = 0
        self.state: Optional[Dict[str, Any]] = None

    def begin(self) -> int:
        self._issued += 1
        return self._issued

    def is_current(self, ticket: int) -> bool:
        return ticket == self._issued

    def apply(self, ticket: int, state: Dict[str, Any]) -> bool:
        """应用导航结果；票据过期时丢弃并返回 False"""
        if not self.is_current(ticket):
            return False
        self.state = state
        return True


class ReadingCursorRegistry:
    """
    按阅读会话保存游标（进程内）

    超过容量时淘汰最久未使用的会话
    """

    def __init__(self, max_readers: int = 10000):
        self.max_readers = max_readers
        self._cursors: "OrderedDict[str, ReadingCursor]" = OrderedDict()

    def get(self, session_id: str) -> ReadingCursor:
        """取出（或新建）会话的游标"""
        cursor = self._cursors.get(session_id)
        if cursor is None:
            cursor = self._cursors[session_id] = ReadingCursor()
        self._cursors.move_to_end(session_id)
        while len(self._cursors) > self.max_readers:
            self._cursors.popitem(last=False)
        return cursor

    def peek(self, session_id: str) -> Optional[ReadingCursor]:
        return self._cursors.get(session_id)

    def __len__(self) -> int:
        return len(self._cursors)


reading_cursors = ReadingCursorRegistry()


class NavigationService:
    """翻页导航服务"""

    @staticmethod
    async def navigate(
        session: AsyncSession,
        page_id: str,
        direction: Direction,
        cursor: Optional[ReadingCursor] = None
    ) -> ApiResponse:
        """
        从当前页面翻到上一页/下一页

        Args:
            session: 数据库会话
            page_id: 当前页面ID
            direction: 翻页方向
            cursor: 阅读游标（可选），结果仅在票据仍为最新时写入游标

        Returns:
            API响应；到达故事尽头时 end_of_story 为 True 且 page 为 None
        """
        direction = Direction(direction)
        ticket = cursor.begin() if cursor else None

        current_page = await PageDAO.get_by_id(session, page_id)
        if not current_page:
            return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")

        current_chapter = await ChapterDAO.get_by_id(session, current_page.chapter_id)
        if not current_chapter:
            return error_response(ErrorCode.CHAPTER_NOT_FOUND, "Chapter not found", "章节不存在")

        pages = await PageDAO.list_by_chapter(session, current_chapter.id)
        chapters = await ChapterDAO.list_by_story(session, current_chapter.story_id)

        async def load_pages(chapter: Chapter) -> List[Page]:
            return await PageDAO.list_by_chapter(session, chapter.id)

        neighbor = await resolve_neighbor(current_page, pages, chapters, load_pages, direction)

        if neighbor is None:
            data = {
                "direction": direction.value,
                "end_of_story": True,
                "page": None,
                "chapter": None,
            }
            message = "End of story" if direction == Direction.NEXT else "Beginning of story"
        else:
            chapter, page = neighbor
            data = {
                "direction": direction.value,
                "end_of_story": False,
                "page": page_to_dict(page, with_segments=True),
                "chapter": chapter_to_dict(chapter) if chapter else None,
            }
            message = None

        if cursor:
            data["applied"] = cursor.apply(ticket, data)

        return ApiResponse(success=True, message=message, data=data)


# 全局导航服务实例
navigation_service = NavigationService()
