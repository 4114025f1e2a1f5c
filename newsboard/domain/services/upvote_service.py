"""Upvote toggle engine for posts and comments."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.errors import ConflictError, NotFoundError
from newsboard.domain.views import UpvoteResult
from newsboard.persistence.database import transaction
from newsboard.persistence.models.upvote import UpvoteTarget
from newsboard.persistence.repositories.base import BaseRepository
from newsboard.persistence.repositories.comment_repository import CommentRepository
from newsboard.persistence.repositories.post_repository import PostRepository
from newsboard.persistence.repositories.upvote_repository import UpvoteRepository

logger = logging.getLogger(__name__)

_CONFLICT_MESSAGE = "Upvote was changed by a concurrent request"


class UpvoteService:
    """Flips a user's upvote on a post or comment.

    The direction is decided from the stored state, not by the caller: an
    existing upvote row is removed and the entity loses a point, otherwise a
    row is inserted and the entity gains one. The points update and the row
    insert/delete commit together or not at all.
    """

    def __init__(self, session: AsyncSession):
        """Initialize upvote service.

        Args:
            session: Database session
        """
        self.session = session
        self.upvotes = UpvoteRepository(session)
        self._stores: dict[UpvoteTarget, BaseRepository] = {
            UpvoteTarget.POST: PostRepository(session),
            UpvoteTarget.COMMENT: CommentRepository(session),
        }

    async def toggle_upvote(
        self, target: UpvoteTarget, entity_id: int, user_id: int
    ) -> UpvoteResult:
        """Toggle the user's upvote on an entity.

        Args:
            target: Whether `entity_id` is a post or a comment
            entity_id: ID of the post or comment
            user_id: ID of the voting user

        Returns:
            The entity's new point total and whether the user now upvotes it

        Raises:
            NotFoundError: If the entity does not exist
            ConflictError: If a concurrent toggle by the same user won the race
        """
        async with transaction(self.session):
            existing = await self.upvotes.find(target, user_id, entity_id)
            was_upvoted = existing is not None
            delta = -1 if was_upvoted else 1

            points = await self._stores[target].increment(entity_id, "points", delta)
            if points is None:
                raise NotFoundError(f"{target.value.capitalize()} not found")

            if was_upvoted:
                if not await self.upvotes.remove(target, existing.id):
                    logger.warning(
                        f"Upvote {existing.id} on {target.value} {entity_id} vanished mid-toggle"
                    )
                    raise ConflictError(_CONFLICT_MESSAGE)
            else:
                try:
                    await self.upvotes.add(target, user_id, entity_id)
                except IntegrityError as e:
                    logger.warning(
                        f"Duplicate upvote by user {user_id} on {target.value} {entity_id}"
                    )
                    raise ConflictError(_CONFLICT_MESSAGE) from e

        if was_upvoted:
            logger.info(f"User {user_id} removed upvote from {target.value} {entity_id}")
        else:
            logger.info(f"User {user_id} upvoted {target.value} {entity_id}")
        return UpvoteResult(points=points, is_upvoted=not was_upvoted)

    async def toggle_post_upvote(self, post_id: int, user_id: int) -> UpvoteResult:
        """Toggle the user's upvote on a post."""
        return await self.toggle_upvote(UpvoteTarget.POST, post_id, user_id)

    async def toggle_comment_upvote(self, comment_id: int, user_id: int) -> UpvoteResult:
        """Toggle the user's upvote on a comment."""
        return await self.toggle_upvote(UpvoteTarget.COMMENT, comment_id, user_id)
