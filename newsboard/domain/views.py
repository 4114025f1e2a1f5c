"""Read-side projections returned by the domain services.

`is_upvoted` is computed per request for one viewer and is never stored.
"""

from dataclasses import dataclass, field

from newsboard.persistence.models.comment import Comment
from newsboard.persistence.models.post import Post


@dataclass
class PostView:
    post: Post
    author_username: str | None
    is_upvoted: bool = False


@dataclass
class CommentView:
    comment: Comment
    author_username: str | None
    is_upvoted: bool = False
    children: list["CommentView"] = field(default_factory=list)


@dataclass(frozen=True)
class UpvoteResult:
    """Outcome of a toggle: the entity's new point total and the caller's vote state."""

    points: int
    is_upvoted: bool
