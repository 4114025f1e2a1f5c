"""Upvote repository for posts and comments."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.persistence.models.upvote import CommentUpvote, PostUpvote, UpvoteTarget

UpvoteModel = PostUpvote | CommentUpvote


class UpvoteRepository:
    """Repository for the who-upvoted-what relation.

    One repository serves both upvote tables; `UpvoteTarget` picks the table
    and the column holding the upvoted entity's id.
    """

    def __init__(self, session: AsyncSession):
        """Initialize upvote repository."""
        self.session = session

    @staticmethod
    def _model(target: UpvoteTarget) -> type[UpvoteModel]:
        return PostUpvote if target is UpvoteTarget.POST else CommentUpvote

    @staticmethod
    def _entity_column(target: UpvoteTarget):
        return PostUpvote.post_id if target is UpvoteTarget.POST else CommentUpvote.comment_id

    async def find(
        self, target: UpvoteTarget, user_id: int, entity_id: int
    ) -> UpvoteModel | None:
        """Get a user's upvote on an entity, if any."""
        model = self._model(target)
        stmt = (
            select(model)
            .where(model.user_id == user_id, self._entity_column(target) == entity_id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, target: UpvoteTarget, user_id: int, entity_id: int) -> UpvoteModel:
        """Insert an upvote row.

        Raises:
            IntegrityError: If the user already has an upvote on this entity
        """
        model = self._model(target)
        column = self._entity_column(target)
        upvote = model(user_id=user_id, **{column.key: entity_id})
        self.session.add(upvote)
        await self.session.flush()
        return upvote

    async def remove(self, target: UpvoteTarget, upvote_id: int) -> bool:
        """Delete an upvote row by id. Returns False if it was already gone."""
        model = self._model(target)
        result = await self.session.execute(delete(model).where(model.id == upvote_id))
        return result.rowcount > 0

    async def upvoted_ids(
        self, target: UpvoteTarget, user_id: int | None, entity_ids: list[int]
    ) -> set[int]:
        """Return the subset of `entity_ids` the user has upvoted."""
        if user_id is None or not entity_ids:
            return set()
        model = self._model(target)
        column = self._entity_column(target)
        stmt = select(column).where(model.user_id == user_id, column.in_(entity_ids))
        result = await self.session.execute(stmt)
        return set(result.scalars().all())
