"""
评论服务

处理故事评论、页面评论及楼中楼回复
"""

from typing import List, Optional, Dict, Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from pagebound.config.settings import settings
from pagebound.models import ApiResponse, ErrorCode, error_response, CommentTarget, LikeTarget
from pagebound.db.dao import CommentDAO, LikeDAO, StoryDAO, PageDAO, ChapterDAO
from pagebound.db.models import Comment
from pagebound.services.counters import bump_story_counter
from pagebound.services.presenters import comment_to_dict

MAX_COMMENT_LENGTH = 2000


async def _target_exists(session: AsyncSession, target: CommentTarget, target_id: str) -> bool:
    if target == CommentTarget.STORY:
        return await StoryDAO.get_by_id(session, target_id) is not None
    return await PageDAO.get_by_id(session, target_id) is not None


def _not_found(target: CommentTarget) -> ApiResponse:
    if target == CommentTarget.STORY:
        return error_response(ErrorCode.STORY_NOT_FOUND, "Story not found", "故事不存在")
    return error_response(ErrorCode.PAGE_NOT_FOUND, "Page not found", "页面不存在")


class CommentService:
    """评论服务"""

    @staticmethod
    async def build_comment_tree(
        session: AsyncSession,
        target: CommentTarget,
        target_id: str,
        reader_session: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        构建评论树

        顶级评论最新在前，回复最早在前。开启嵌套时按
        COMMENT_DISPLAY_DEPTH 逐层查询子评论并挂到父评论下；
        更深的回复只体现在 reply_count 中

        Args:
            session: 数据库会话
            target: 评论目标类型
            target_id: 故事ID或页面ID
            reader_session: 当前匿名会话（可选，用于判断点赞状态）

        Returns:
            评论字典列表
        """
        nested = settings.COMMENTS_NESTED
        max_depth = max(1, settings.COMMENT_DISPLAY_DEPTH) if nested else 1

        top_level = await CommentDAO.get_top_level(session, target, target_id)

        # 逐层展开：levels[i] 为第 i+1 层评论
        levels: List[List[Comment]] = [top_level]
        children: Dict[str, List[Comment]] = {}
        while len(levels) < max_depth and levels[-1]:
            next_level = []
            for comment in levels[-1]:
                replies = await CommentDAO.get_replies(session, comment.id)
                children[comment.id] = replies
                next_level.extend(replies)
            levels.append(next_level)

        all_ids = [comment.id for level in levels for comment in level]
        like_counts = await LikeDAO.count_many(session, LikeTarget.COMMENT, all_ids)
        liked = await LikeDAO.liked_among(session, LikeTarget.COMMENT, all_ids, reader_session)
        reply_counts = await CommentDAO.count_replies(session, all_ids)

        def render(comment: Comment) -> Dict[str, Any]:
            return comment_to_dict(
                comment,
                like_count=like_counts.get(comment.id, 0),
                is_liked=comment.id in liked,
                reply_count=reply_counts.get(comment.id, 0),
                replies=[render(reply) for reply in children.get(comment.id, [])],
            )

        return [render(comment) for comment in top_level]

    @staticmethod
    async def list_comments(
        session: AsyncSession,
        target: CommentTarget,
        target_id: str,
        reader_session: Optional[str] = None
    ) -> ApiResponse:
        """
        获取评论列表

        Returns:
            API响应，包含评论树与总数（含回复）；没有评论时返回空列表
        """
        target = CommentTarget(target)
        if not await _target_exists(session, target, target_id):
            return _not_found(target)

        comments = await CommentService.build_comment_tree(session, target, target_id, reader_session)
        total = await CommentDAO.count_for_target(session, target, target_id)

        return ApiResponse(
            success=True,
            message=None if comments else "No comments yet",
            data={
                "target_type": target.value,
                "target_id": target_id,
                "comments": comments,
                "total": total,
            }
        )

    @staticmethod
    async def post_comment(
        session: AsyncSession,
        target: CommentTarget,
        target_id: str,
        user_name: str,
        content: str,
        parent_comment_id: Optional[str] = None
    ) -> ApiResponse:
        """
        发表评论

        昵称和内容在访问数据库之前校验（去除首尾空白后不能为空）

        Args:
            session: 数据库会话
            target: 评论目标类型
            target_id: 故事ID或页面ID
            user_name: 昵称（匿名，自由填写）
            content: 评论内容
            parent_comment_id: 父评论ID（回复）

        Returns:
            API响应，包含新创建的评论
        """
        target = CommentTarget(target)
        user_name = (user_name or "").strip()
        content = (content or "").strip()

        # 验证昵称与内容
        if not user_name or not content:
            return error_response(
                ErrorCode.VALIDATION_FAILED,
                "Name and comment are required",
                "请填写昵称和评论内容"
            )
        if len(content) > MAX_COMMENT_LENGTH:
            return error_response(
                ErrorCode.VALIDATION_FAILED,
                f"Comment must be at most {MAX_COMMENT_LENGTH} characters",
                f"评论内容不能超过{MAX_COMMENT_LENGTH}字符"
            )

        if not await _target_exists(session, target, target_id):
            return _not_found(target)

        # 如果是回复，父评论必须存在且属于同一目标
        if parent_comment_id:
            parent = await CommentDAO.get_by_id(session, parent_comment_id)
            parent_target_id = (parent.story_id or parent.page_id) if parent else None
            if not parent or parent.target_type != target.value or parent_target_id != target_id:
                return error_response(ErrorCode.PARENT_NOT_FOUND, "Parent comment not found", "父评论不存在")

        comment = await CommentDAO.create(
            session, target, target_id, user_name, content, parent_comment_id
        )

        # 页面评论顺带累加故事的展示评论数
        if target == CommentTarget.PAGE:
            page = await PageDAO.get_by_id(session, target_id)
            chapter = await ChapterDAO.get_by_id(session, page.chapter_id)
            if chapter:
                await bump_story_counter(session, chapter.story_id, "fake_comments")

        logger.info(f"💬 Comment {comment.id} posted on {target.value} {target_id}")

        return ApiResponse(
            success=True,
            message="Comment created",
            data=comment_to_dict(comment)
        )


# 全局评论服务实例
comment_service = CommentService()
