"""Page and sort parameters shared by every listing."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from sqlalchemy.orm import InstrumentedAttribute

from newsboard.core.errors import ValidationFailure

T = TypeVar("T")


class SortField(str, Enum):
    """Sortable columns."""

    POINTS = "points"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page window plus sort order."""

    page: int = 1
    limit: int = 10
    sort_by: SortField = SortField.POINTS
    order: SortOrder = SortOrder.DESC

    def __post_init__(self):
        if self.page < 1:
            raise ValidationFailure("page must be >= 1")
        if self.limit < 1:
            raise ValidationFailure("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def order_by(
        self,
        points: InstrumentedAttribute,
        created_at: InstrumentedAttribute,
        id_column: InstrumentedAttribute,
    ) -> list:
        """Build ORDER BY clauses; `id` breaks ties in the same direction."""
        column = points if self.sort_by is SortField.POINTS else created_at
        if self.order is SortOrder.DESC:
            return [column.desc(), id_column.desc()]
        return [column.asc(), id_column.asc()]


def total_pages(total_count: int, limit: int) -> int:
    """Number of pages needed to show `total_count` rows, `limit` per page."""
    return math.ceil(total_count / limit)


@dataclass
class Page(Generic[T]):
    """One page of results plus the size of the whole filtered set."""

    items: list[T]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.limit)
