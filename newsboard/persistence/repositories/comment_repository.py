"""Comment repository.

All thread navigation goes through `parent_comment_id` lookups; a listing
never walks further than one level below the requested parent.
"""

from collections import defaultdict

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.pagination import PageRequest
from newsboard.persistence.models.comment import Comment
from newsboard.persistence.models.user import User
from newsboard.persistence.repositories.base import BaseRepository

CommentRow = tuple[Comment, str | None]


class CommentRepository(BaseRepository[Comment]):
    """Repository for comments and their counters."""

    def __init__(self, session: AsyncSession):
        """Initialize comment repository."""
        super().__init__(Comment, session)

    @staticmethod
    def _select_with_author() -> Select:
        return (
            select(Comment, User.username)
            .outerjoin(User, User.id == Comment.author_id)
            .execution_options(populate_existing=True)
        )

    async def _page(self, stmt: Select, page: PageRequest) -> list[CommentRow]:
        stmt = (
            stmt.order_by(*page.order_by(Comment.points, Comment.created_at, Comment.id))
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self.session.execute(stmt)
        return [(comment, username) for comment, username in result.all()]

    async def _count(self, *criteria) -> int:
        stmt = select(func.count(distinct(Comment.id))).where(*criteria)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    # --- Top-level comments ---

    async def count_top_level(self, post_id: int) -> int:
        """Count comments attached directly to a post."""
        return await self._count(
            Comment.post_id == post_id, Comment.parent_comment_id.is_(None)
        )

    async def list_top_level(self, post_id: int, page: PageRequest) -> list[CommentRow]:
        """Get one page of a post's top-level comments with author usernames."""
        stmt = self._select_with_author().where(
            Comment.post_id == post_id, Comment.parent_comment_id.is_(None)
        )
        return await self._page(stmt, page)

    # --- Replies ---

    async def count_children(self, parent_comment_id: int) -> int:
        """Count direct replies to a comment."""
        return await self._count(Comment.parent_comment_id == parent_comment_id)

    async def list_children(
        self, parent_comment_id: int, page: PageRequest
    ) -> list[CommentRow]:
        """Get one page of direct replies to a comment."""
        stmt = self._select_with_author().where(
            Comment.parent_comment_id == parent_comment_id
        )
        return await self._page(stmt, page)

    async def list_children_preview(
        self,
        parent_ids: list[int],
        page: PageRequest,
        per_parent: int,
    ) -> dict[int, list[CommentRow]]:
        """Get up to `per_parent` direct replies for each parent in one query.

        Replies are ranked within their parent using the page's sort order.
        """
        if not parent_ids or per_parent < 1:
            return {}

        ordering = page.order_by(Comment.points, Comment.created_at, Comment.id)
        ranked = (
            select(
                Comment.id.label("id"),
                func.row_number()
                .over(partition_by=Comment.parent_comment_id, order_by=ordering)
                .label("rank"),
            )
            .where(Comment.parent_comment_id.in_(parent_ids))
            .subquery()
        )
        stmt = (
            self._select_with_author()
            .join(ranked, ranked.c.id == Comment.id)
            .where(ranked.c.rank <= per_parent)
            .order_by(*ordering)
        )
        result = await self.session.execute(stmt)

        previews: dict[int, list[CommentRow]] = defaultdict(list)
        for comment, username in result.all():
            previews[comment.parent_comment_id].append((comment, username))
        return dict(previews)
