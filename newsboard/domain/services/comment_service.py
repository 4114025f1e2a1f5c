"""Threaded comment store.

Every comment write bumps the counters it affects in the same transaction
as the insert: the post's `comment_count` always, and for replies also the
parent comment's `comment_count`.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.errors import NotFoundError, ValidationFailure
from newsboard.persistence.database import transaction
from newsboard.persistence.models.comment import Comment
from newsboard.persistence.repositories.comment_repository import CommentRepository
from newsboard.persistence.repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)

MIN_COMMENT_LENGTH = 3


def _clean_content(content: str) -> str:
    content = content.strip()
    if len(content) < MIN_COMMENT_LENGTH:
        raise ValidationFailure(f"Comments must be at least {MIN_COMMENT_LENGTH} characters long")
    return content


class CommentService:
    """Service for creating comments and replies."""

    def __init__(self, session: AsyncSession):
        """Initialize comment service.

        Args:
            session: Database session
        """
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)

    async def create_top_level_comment(
        self, post_id: int, author_id: int, content: str
    ) -> Comment:
        """Comment directly on a post.

        Raises:
            NotFoundError: If the post does not exist
        """
        content = _clean_content(content)

        async with transaction(self.session):
            if await self.posts.increment(post_id, "comment_count") is None:
                raise NotFoundError("Post not found")

            comment = await self.comments.add(
                post_id=post_id,
                author_id=author_id,
                parent_comment_id=None,
                content=content,
                depth=0,
                comment_count=0,
                points=0,
            )

        logger.info(f"Created comment id={comment.id} on post {post_id} by user_id={author_id}")
        return comment

    async def create_reply(
        self, parent_comment_id: int, author_id: int, content: str
    ) -> Comment:
        """Reply to an existing comment.

        The reply inherits the parent's post and sits one level deeper.

        Raises:
            NotFoundError: If the parent comment or its post does not exist
        """
        content = _clean_content(content)

        async with transaction(self.session):
            parent = await self.comments.get_by_id(parent_comment_id)
            if parent is None:
                raise NotFoundError("Comment not found")

            post_id = parent.post_id
            depth = parent.depth + 1

            if await self.comments.increment(parent.id, "comment_count") is None:
                raise NotFoundError("Comment not found")
            if await self.posts.increment(post_id, "comment_count") is None:
                raise NotFoundError("Post not found")

            reply = await self.comments.add(
                post_id=post_id,
                author_id=author_id,
                parent_comment_id=parent.id,
                content=content,
                depth=depth,
                comment_count=0,
                points=0,
            )

        logger.info(
            f"Created reply id={reply.id} to comment {parent_comment_id} "
            f"on post {post_id} by user_id={author_id}"
        )
        return reply
