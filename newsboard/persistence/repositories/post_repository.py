"""Post repository."""

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.pagination import PageRequest
from newsboard.persistence.models.post import Post
from newsboard.persistence.models.user import User
from newsboard.persistence.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for posts and their counters."""

    def __init__(self, session: AsyncSession):
        """Initialize post repository."""
        super().__init__(Post, session)

    @staticmethod
    def _filters(author_id: int | None, site: str | None) -> list:
        filters = []
        if author_id is not None:
            filters.append(Post.author_id == author_id)
        if site:
            filters.append(Post.url == site)
        return filters

    async def get_with_author(self, post_id: int) -> tuple[Post, str | None] | None:
        """Get a post together with its author's username."""
        stmt = (
            select(Post, User.username)
            .outerjoin(User, User.id == Post.author_id)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def count(self, author_id: int | None = None, site: str | None = None) -> int:
        """Count posts matching the listing filters, ignoring pagination."""
        stmt = select(func.count(distinct(Post.id))).where(*self._filters(author_id, site))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_with_authors(
        self,
        page: PageRequest,
        author_id: int | None = None,
        site: str | None = None,
    ) -> list[tuple[Post, str | None]]:
        """Get one page of posts with author usernames."""
        stmt = (
            select(Post, User.username)
            .outerjoin(User, User.id == Post.author_id)
            .where(*self._filters(author_id, site))
            .order_by(*page.order_by(Post.points, Post.created_at, Post.id))
            .offset(page.offset)
            .limit(page.limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [(post, username) for post, username in result.all()]
