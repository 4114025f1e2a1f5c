"""Post store: creation, lookup, and listing of posts."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.errors import NotFoundError, ValidationFailure
from newsboard.domain.pagination import Page, PageRequest
from newsboard.domain.views import PostView
from newsboard.persistence.database import transaction
from newsboard.persistence.models.post import Post
from newsboard.persistence.models.upvote import UpvoteTarget
from newsboard.persistence.repositories.post_repository import PostRepository
from newsboard.persistence.repositories.upvote_repository import UpvoteRepository

logger = logging.getLogger(__name__)


class PostService:
    """Service for posts and their denormalized counters."""

    def __init__(self, session: AsyncSession):
        """Initialize post service.

        Args:
            session: Database session
        """
        self.session = session
        self.posts = PostRepository(session)
        self.upvotes = UpvoteRepository(session)

    async def create_post(
        self,
        author_id: int,
        title: str,
        content: str | None = None,
        url: str | None = None,
    ) -> Post:
        """Create a post with zeroed counters.

        Args:
            author_id: ID of the posting user
            title: Post title
            content: Optional text body
            url: Optional link

        Returns:
            The new post

        Raises:
            ValidationFailure: If the title is blank or neither url nor content is given
        """
        title = title.strip()
        content = content.strip() if content else None
        if not title:
            raise ValidationFailure("Title is required")
        if not content and not url:
            raise ValidationFailure("A post needs a url or some content")

        async with transaction(self.session):
            post = await self.posts.add(
                author_id=author_id,
                title=title,
                content=content or None,
                url=url,
                points=0,
                comment_count=0,
            )

        logger.info(f"Created post id={post.id} by user_id={author_id}")
        return post

    async def get_post(self, post_id: int, viewer_id: int | None = None) -> PostView:
        """Get a post with its author and the viewer's upvote state.

        Raises:
            NotFoundError: If the post does not exist
        """
        row = await self.posts.get_with_author(post_id)
        if row is None:
            raise NotFoundError("Post not found")

        post, author_username = row
        upvoted = await self.upvotes.upvoted_ids(UpvoteTarget.POST, viewer_id, [post.id])
        return PostView(post=post, author_username=author_username, is_upvoted=post.id in upvoted)

    async def list_posts(
        self,
        page: PageRequest,
        viewer_id: int | None = None,
        author_id: int | None = None,
        site: str | None = None,
    ) -> Page[PostView]:
        """List posts, optionally filtered by author or exact url."""
        total_count = await self.posts.count(author_id=author_id, site=site)
        rows = await self.posts.list_with_authors(page, author_id=author_id, site=site)

        upvoted = await self.upvotes.upvoted_ids(
            UpvoteTarget.POST, viewer_id, [post.id for post, _ in rows]
        )
        items = [
            PostView(post=post, author_username=username, is_upvoted=post.id in upvoted)
            for post, username in rows
        ]
        return Page(items=items, page=page.page, limit=page.limit, total_count=total_count)
