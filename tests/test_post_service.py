"""Tests for post creation, lookup, and listing."""

import pytest

from newsboard.core.errors import NotFoundError, ValidationFailure
from newsboard.domain.pagination import PageRequest, SortField, SortOrder
from newsboard.domain.services.post_service import PostService
from newsboard.domain.services.upvote_service import UpvoteService


@pytest.mark.asyncio
async def test_create_post_starts_with_zero_counters(db_session, create_user):
    """Test that new posts have no points and no comments."""
    author_id = await create_user("author")

    post = await PostService(db_session).create_post(
        author_id=author_id, title="  Padded title  ", url="https://example.com/a"
    )

    assert post.id is not None
    assert post.title == "Padded title"
    assert post.content is None
    assert post.points == 0
    assert post.comment_count == 0


@pytest.mark.asyncio
async def test_create_post_requires_url_or_content(db_session, create_user):
    """Test that a post with neither url nor content is rejected."""
    author_id = await create_user("author")

    with pytest.raises(ValidationFailure):
        await PostService(db_session).create_post(author_id=author_id, title="Empty", content="  ")


@pytest.mark.asyncio
async def test_get_post_reports_viewer_upvote(db_session, create_user):
    """Test that is_upvoted is computed for the requesting user only."""
    author_id = await create_user("author")
    voter_id = await create_user("voter")
    service = PostService(db_session)
    post = await service.create_post(author_id=author_id, title="Vote here", content="body")
    await UpvoteService(db_session).toggle_post_upvote(post.id, voter_id)

    as_voter = await service.get_post(post.id, viewer_id=voter_id)
    assert as_voter.is_upvoted is True
    assert as_voter.post.points == 1
    assert as_voter.author_username == "author"

    as_author = await service.get_post(post.id, viewer_id=author_id)
    assert as_author.is_upvoted is False

    anonymous = await service.get_post(post.id)
    assert anonymous.is_upvoted is False


@pytest.mark.asyncio
async def test_get_missing_post_is_not_found(db_session):
    """Test that an unknown post id raises NotFoundError."""
    with pytest.raises(NotFoundError):
        await PostService(db_session).get_post(12345)


@pytest.mark.asyncio
async def test_list_posts_filters_and_counts(db_session, create_user):
    """Test that author and site filters apply to both the page and the total."""
    alice_id = await create_user("alice")
    bob_id = await create_user("bob")
    service = PostService(db_session)
    for i in range(3):
        await service.create_post(author_id=alice_id, title=f"Alice post {i}", content="text")
    await service.create_post(author_id=bob_id, title="Bob link", url="https://bob.dev/x")
    await service.create_post(author_id=alice_id, title="Alice link", url="https://bob.dev/x")

    by_alice = await service.list_posts(PageRequest(limit=2), author_id=alice_id)
    assert by_alice.total_count == 4
    assert by_alice.total_pages == 2
    assert len(by_alice.items) == 2
    assert all(view.post.author_id == alice_id for view in by_alice.items)

    by_site = await service.list_posts(PageRequest(), site="https://bob.dev/x")
    assert by_site.total_count == 2
    assert {view.author_username for view in by_site.items} == {"alice", "bob"}

    both = await service.list_posts(PageRequest(), author_id=bob_id, site="https://bob.dev/x")
    assert [view.post.title for view in both.items] == ["Bob link"]


@pytest.mark.asyncio
async def test_list_posts_sorting_is_stable(db_session, create_user):
    """Test that points ties are broken by id in the requested direction."""
    author_id = await create_user("author")
    voter_id = await create_user("voter")
    service = PostService(db_session)
    ids = [
        (await service.create_post(author_id=author_id, title=f"Post {i}", content="x")).id
        for i in range(4)
    ]
    await UpvoteService(db_session).toggle_post_upvote(ids[2], voter_id)

    desc = await service.list_posts(PageRequest(sort_by=SortField.POINTS, order=SortOrder.DESC))
    assert [view.post.id for view in desc.items] == [ids[2], ids[3], ids[1], ids[0]]

    asc = await service.list_posts(PageRequest(sort_by=SortField.POINTS, order=SortOrder.ASC))
    assert [view.post.id for view in asc.items] == [ids[0], ids[1], ids[3], ids[2]]

    newest = await service.list_posts(
        PageRequest(sort_by=SortField.CREATED_AT, order=SortOrder.DESC)
    )
    assert [view.post.id for view in newest.items] == list(reversed(ids))


@pytest.mark.asyncio
async def test_list_posts_marks_viewer_upvotes(db_session, create_user):
    """Test that listings annotate each post with the viewer's vote."""
    author_id = await create_user("author")
    voter_id = await create_user("voter")
    service = PostService(db_session)
    liked = await service.create_post(author_id=author_id, title="Liked", content="x")
    await service.create_post(author_id=author_id, title="Ignored", content="x")
    await UpvoteService(db_session).toggle_post_upvote(liked.id, voter_id)

    result = await service.list_posts(PageRequest(), viewer_id=voter_id)
    flags = {view.post.title: view.is_upvoted for view in result.items}
    assert flags == {"Liked": True, "Ignored": False}
