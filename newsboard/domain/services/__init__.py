"""Domain services."""

from newsboard.domain.services.auth_service import AuthService
from newsboard.domain.services.comment_service import CommentService
from newsboard.domain.services.post_service import PostService
from newsboard.domain.services.thread_composer import ThreadComposer
from newsboard.domain.services.upvote_service import UpvoteService

__all__ = [
    "AuthService",
    "CommentService",
    "PostService",
    "ThreadComposer",
    "UpvoteService",
]
