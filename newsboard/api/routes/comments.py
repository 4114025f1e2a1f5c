"""Comment endpoints: replies, upvotes, and child listings."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.api.deps import get_current_user, get_optional_user, get_page_request
from newsboard.api.schemas.comments import CommentCreate, CommentResponse
from newsboard.api.schemas.common import PaginatedResponse, UpvoteResponse
from newsboard.domain.pagination import PageRequest
from newsboard.domain.services.comment_service import CommentService
from newsboard.domain.services.thread_composer import ThreadComposer
from newsboard.domain.services.upvote_service import UpvoteService
from newsboard.persistence.database import get_db
from newsboard.persistence.models.user import User

router = APIRouter()


@router.post("/{comment_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_reply(
    comment_id: int,
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentResponse:
    """Reply to a comment."""
    reply = await CommentService(db).create_reply(
        parent_comment_id=comment_id,
        author_id=current_user.id,
        content=comment_data.content,
    )
    return CommentResponse.from_comment(reply, current_user.username)


@router.post("/{comment_id}/upvote", response_model=UpvoteResponse)
async def toggle_comment_upvote(
    comment_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UpvoteResponse:
    """Toggle upvote on a comment."""
    result = await UpvoteService(db).toggle_comment_upvote(comment_id, current_user.id)
    return UpvoteResponse(points=result.points, is_upvoted=result.is_upvoted)


@router.get("/{comment_id}/comments", response_model=PaginatedResponse[CommentResponse])
async def list_child_comments(
    comment_id: int,
    page: Annotated[PageRequest, Depends(get_page_request)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PaginatedResponse[CommentResponse]:
    """List direct replies to a comment."""
    result = await ThreadComposer(db).list_children(
        comment_id, page, viewer_id=viewer.id if viewer else None
    )
    return PaginatedResponse[CommentResponse].from_page(
        result, [CommentResponse.from_view(view) for view in result.items]
    )
