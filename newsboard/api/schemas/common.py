"""Shared response models."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel

from newsboard.domain.pagination import Page

T = TypeVar("T")


def isoformat_utc(dt: datetime | None) -> str | None:
    """Convert datetime to UTC ISO format."""
    if not dt:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


class AuthorResponse(BaseModel):
    """Author identity shown next to posts and comments."""

    id: int
    username: str | None


class UpvoteResponse(BaseModel):
    """Upvote toggle response."""

    points: int
    is_upvoted: bool


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing."""

    items: list[T]
    page: int
    total_pages: int
    total_count: int

    @classmethod
    def from_page(cls, page: Page, items: list[T]) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            page=page.page,
            total_pages=page.total_pages,
            total_count=page.total_count,
        )
