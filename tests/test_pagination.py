"""Tests for page arithmetic and sort clauses."""

import pytest

from newsboard.core.errors import ValidationFailure
from newsboard.domain.pagination import Page, PageRequest, SortField, SortOrder, total_pages
from newsboard.persistence.models.post import Post


@pytest.mark.parametrize(
    "count,limit,expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 7, 4)],
)
def test_total_pages_is_ceiling_of_count_over_limit(count, limit, expected):
    """Test that total pages rounds up."""
    assert total_pages(count, limit) == expected


def test_page_offset():
    """Test that pages are 1-indexed."""
    assert PageRequest(page=1, limit=20).offset == 0
    assert PageRequest(page=3, limit=20).offset == 40


@pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0)])
def test_invalid_page_request(page, limit):
    """Test that non-positive page or limit is rejected."""
    with pytest.raises(ValidationFailure):
        PageRequest(page=page, limit=limit)


def test_page_exposes_total_pages():
    """Test that a Page derives total_pages from its count and limit."""
    page = Page(items=[], page=4, limit=5, total_count=16)
    assert page.total_pages == 4


def test_order_by_appends_id_tie_breaker():
    """Test that the id column follows the primary sort in the same direction."""
    clauses = PageRequest(sort_by=SortField.CREATED_AT, order=SortOrder.ASC).order_by(
        Post.points, Post.created_at, Post.id
    )
    rendered = [str(clause) for clause in clauses]
    assert rendered == ["posts.created_at ASC", "posts.id ASC"]

    clauses = PageRequest().order_by(Post.points, Post.created_at, Post.id)
    assert [str(clause) for clause in clauses] == ["posts.points DESC", "posts.id DESC"]
