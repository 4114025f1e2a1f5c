"""Post model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from newsboard.persistence.database import Base


class Post(Base):
    """Link or text submission.

    `points` and `comment_count` are denormalized counters maintained by
    the upvote and comment write paths; they are never recomputed on read.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=True)
    url = Column(Text, nullable=True, index=True)
    points = Column(Integer, default=0, nullable=False)
    comment_count = Column(Integer, default=0, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r}, points={self.points})>"
