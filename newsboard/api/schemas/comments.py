"""Comment request and response models."""

from pydantic import BaseModel, Field

from newsboard.api.schemas.common import AuthorResponse, isoformat_utc
from newsboard.domain.services.comment_service import MIN_COMMENT_LENGTH
from newsboard.domain.views import CommentView
from newsboard.persistence.models.comment import Comment


class CommentCreate(BaseModel):
    """Create comment or reply request."""

    content: str = Field(min_length=MIN_COMMENT_LENGTH)


class CommentResponse(BaseModel):
    """Comment with author, viewer upvote state, and optional reply preview."""

    id: int
    post_id: int
    parent_comment_id: int | None
    content: str
    depth: int
    points: int
    comment_count: int
    created_at: str | None
    author: AuthorResponse
    is_upvoted: bool
    child_comments: list["CommentResponse"] = []

    @classmethod
    def from_comment(
        cls, comment: Comment, author_username: str | None, is_upvoted: bool = False
    ) -> "CommentResponse":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            parent_comment_id=comment.parent_comment_id,
            content=comment.content,
            depth=comment.depth,
            points=comment.points,
            comment_count=comment.comment_count,
            created_at=isoformat_utc(comment.created_at),
            author=AuthorResponse(id=comment.author_id, username=author_username),
            is_upvoted=is_upvoted,
        )

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        response = cls.from_comment(view.comment, view.author_username, view.is_upvoted)
        response.child_comments = [cls.from_view(child) for child in view.children]
        return response
