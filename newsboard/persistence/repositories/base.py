"""Base repository with id lookups and atomic counter updates."""

from typing import Generic, Type, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository for models keyed by an integer `id`.

    Repositories only flush; committing is owned by the caller's
    `transaction()` block.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """Initialize repository with model and session."""
        self.model = model
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        """Get entity by ID, refreshed from the database."""
        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, id: int) -> bool:
        """Check whether a row with this ID exists."""
        stmt = select(self.model.id).where(self.model.id == id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add(self, **data) -> ModelType:
        """Insert a new entity and flush so its ID is assigned."""
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def increment(self, id: int, column_name: str, delta: int = 1) -> int | None:
        """Add `delta` to a counter column in a single UPDATE statement.

        Returns:
            The counter's new value, or None if no row matched
        """
        column = getattr(self.model, column_name)
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values({column: column + delta})
            .returning(column)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
