"""Comment model.

Threads are stored as an adjacency list: a comment only knows its
`parent_comment_id`. There are no ORM relationships between
comments; children are always reached by querying on the parent id.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Text

from newsboard.persistence.database import Base


class Comment(Base):
    """Comment on a post, or reply to another comment."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_post_parent", "post_id", "parent_comment_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )
    parent_comment_id = Column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    content = Column(Text, nullable=False)
    depth = Column(Integer, default=0, nullable=False)  # 0 for top-level
    comment_count = Column(Integer, default=0, nullable=False)  # direct children only
    points = Column(Integer, default=0, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Comment(id={self.id}, post_id={self.post_id}, "
            f"parent_comment_id={self.parent_comment_id}, depth={self.depth})>"
        )
