"""Upvote models.

The presence of a row is the upvoted state. Each user can upvote a given
post or comment at most once, enforced by a unique constraint.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint

from newsboard.persistence.database import Base


class UpvoteTarget(str, Enum):
    """Kind of entity an upvote points at."""

    POST = "post"
    COMMENT = "comment"


class PostUpvote(Base):
    """Upvote on a post."""

    __tablename__ = "post_upvotes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_post_upvote"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )


class CommentUpvote(Base):
    """Upvote on a comment."""

    __tablename__ = "comment_upvotes"
    __table_args__ = (UniqueConstraint("user_id", "comment_id", name="uq_comment_upvote"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    comment_id = Column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
