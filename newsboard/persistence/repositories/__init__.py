"""Repository implementations."""

from newsboard.persistence.repositories.base import BaseRepository
from newsboard.persistence.repositories.comment_repository import CommentRepository
from newsboard.persistence.repositories.post_repository import PostRepository
from newsboard.persistence.repositories.upvote_repository import UpvoteRepository
from newsboard.persistence.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "UpvoteRepository",
]
