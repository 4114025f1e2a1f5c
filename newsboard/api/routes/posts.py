"""Post endpoints: submissions, upvotes, and top-level comments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.api.deps import get_current_user, get_optional_user, get_page_request
from newsboard.api.schemas.comments import CommentCreate, CommentResponse
from newsboard.api.schemas.common import PaginatedResponse, UpvoteResponse
from newsboard.api.schemas.posts import PostCreate, PostCreatedResponse, PostResponse
from newsboard.domain.pagination import PageRequest
from newsboard.domain.services.comment_service import CommentService
from newsboard.domain.services.post_service import PostService
from newsboard.domain.services.thread_composer import ThreadComposer
from newsboard.domain.services.upvote_service import UpvoteService
from newsboard.persistence.database import get_db
from newsboard.persistence.models.user import User

router = APIRouter()


@router.post("", response_model=PostCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostCreatedResponse:
    """Create a new post."""
    post = await PostService(db).create_post(
        author_id=current_user.id,
        title=post_data.title,
        content=post_data.content,
        url=post_data.url,
    )
    return PostCreatedResponse(post_id=post.id)


@router.get("", response_model=PaginatedResponse[PostResponse])
async def list_posts(
    page: Annotated[PageRequest, Depends(get_page_request)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    author: int | None = Query(None, description="Only posts by this user id"),
    site: str | None = Query(None, description="Only posts linking to this exact url"),
) -> PaginatedResponse[PostResponse]:
    """List posts."""
    result = await PostService(db).list_posts(
        page,
        viewer_id=viewer.id if viewer else None,
        author_id=author,
        site=site,
    )
    return PaginatedResponse[PostResponse].from_page(
        result, [PostResponse.from_view(view) for view in result.items]
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    viewer: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostResponse:
    """Get a single post."""
    view = await PostService(db).get_post(post_id, viewer_id=viewer.id if viewer else None)
    return PostResponse.from_view(view)


@router.post("/{post_id}/upvote", response_model=UpvoteResponse)
async def toggle_post_upvote(
    post_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UpvoteResponse:
    """Toggle upvote on a post (add if not upvoted, remove if already upvoted)."""
    result = await UpvoteService(db).toggle_post_upvote(post_id, current_user.id)
    return UpvoteResponse(points=result.points, is_upvoted=result.is_upvoted)


@router.post(
    "/{post_id}/comment",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentResponse:
    """Create a top-level comment on a post."""
    comment = await CommentService(db).create_top_level_comment(
        post_id=post_id,
        author_id=current_user.id,
        content=comment_data.content,
    )
    return CommentResponse.from_comment(comment, current_user.username)


@router.get("/{post_id}/comments", response_model=PaginatedResponse[CommentResponse])
async def list_post_comments(
    post_id: int,
    page: Annotated[PageRequest, Depends(get_page_request)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    include_children: bool = Query(False),
) -> PaginatedResponse[CommentResponse]:
    """List a post's top-level comments, optionally with a preview of replies."""
    result = await ThreadComposer(db).list_post_comments(
        post_id,
        page,
        viewer_id=viewer.id if viewer else None,
        include_children=include_children,
    )
    return PaginatedResponse[CommentResponse].from_page(
        result, [CommentResponse.from_view(view) for view in result.items]
    )
