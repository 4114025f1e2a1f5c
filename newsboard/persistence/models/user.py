"""User model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from newsboard.persistence.database import Base


class User(Base):
    """Registered forum user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(31), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
