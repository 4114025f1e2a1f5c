"""Comment thread composer.

Assembles paginated views of a comment subtree, one level at a time, with
author usernames and the requesting user's own upvote state. Read only.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.errors import NotFoundError
from newsboard.domain.pagination import Page, PageRequest
from newsboard.domain.views import CommentView
from newsboard.persistence.models.upvote import UpvoteTarget
from newsboard.persistence.repositories.comment_repository import CommentRepository, CommentRow
from newsboard.persistence.repositories.post_repository import PostRepository
from newsboard.persistence.repositories.upvote_repository import UpvoteRepository
from newsboard.settings import settings


class ThreadComposer:
    """Builds comment listings for posts and for individual comments."""

    def __init__(self, session: AsyncSession, preview_limit: int | None = None):
        """Initialize thread composer.

        Args:
            session: Database session
            preview_limit: Replies shown under each comment when children are
                requested; defaults to `settings.children_preview_limit`
        """
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)
        self.upvotes = UpvoteRepository(session)
        self.preview_limit = (
            settings.children_preview_limit if preview_limit is None else preview_limit
        )

    async def list_post_comments(
        self,
        post_id: int,
        page: PageRequest,
        viewer_id: int | None = None,
        include_children: bool = False,
    ) -> Page[CommentView]:
        """List a post's top-level comments.

        With `include_children`, each comment also carries up to
        `preview_limit` of its direct replies in the same sort order.

        Raises:
            NotFoundError: If the post does not exist
        """
        if not await self.posts.exists(post_id):
            raise NotFoundError("Post not found")

        total_count = await self.comments.count_top_level(post_id)
        rows = await self.comments.list_top_level(post_id, page)

        previews: dict[int, list[CommentRow]] = {}
        if include_children and rows:
            previews = await self.comments.list_children_preview(
                [comment.id for comment, _ in rows], page, self.preview_limit
            )

        comment_ids = [comment.id for comment, _ in rows]
        for children in previews.values():
            comment_ids.extend(child.id for child, _ in children)
        upvoted = await self.upvotes.upvoted_ids(UpvoteTarget.COMMENT, viewer_id, comment_ids)

        items = []
        for row in rows:
            view = self._view(row, upvoted)
            view.children = [
                self._view(child, upvoted) for child in previews.get(view.comment.id, [])
            ]
            items.append(view)
        return Page(items=items, page=page.page, limit=page.limit, total_count=total_count)

    async def list_children(
        self,
        parent_comment_id: int,
        page: PageRequest,
        viewer_id: int | None = None,
    ) -> Page[CommentView]:
        """List the direct replies to a comment.

        An unknown parent simply has no replies.
        """
        total_count = await self.comments.count_children(parent_comment_id)
        rows = await self.comments.list_children(parent_comment_id, page)
        upvoted = await self.upvotes.upvoted_ids(
            UpvoteTarget.COMMENT, viewer_id, [comment.id for comment, _ in rows]
        )
        items = [self._view(row, upvoted) for row in rows]
        return Page(items=items, page=page.page, limit=page.limit, total_count=total_count)

    @staticmethod
    def _view(row: CommentRow, upvoted: set[int]) -> CommentView:
        comment, author_username = row
        return CommentView(
            comment=comment,
            author_username=author_username,
            is_upvoted=comment.id in upvoted,
        )
