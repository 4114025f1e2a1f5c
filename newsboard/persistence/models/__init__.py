"""Database models."""

from newsboard.persistence.models.comment import Comment
from newsboard.persistence.models.post import Post
from newsboard.persistence.models.upvote import CommentUpvote, PostUpvote, UpvoteTarget
from newsboard.persistence.models.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "PostUpvote",
    "CommentUpvote",
    "UpvoteTarget",
]
