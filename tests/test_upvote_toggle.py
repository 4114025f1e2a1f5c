"""Tests for the upvote toggle engine."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from newsboard.core.errors import ConflictError, NotFoundError
from newsboard.domain.services.comment_service import CommentService
from newsboard.domain.services.post_service import PostService
from newsboard.domain.services.upvote_service import UpvoteService
from newsboard.persistence.models.upvote import CommentUpvote, PostUpvote, UpvoteTarget
from newsboard.persistence.repositories.comment_repository import CommentRepository
from newsboard.persistence.repositories.post_repository import PostRepository
from newsboard.persistence.repositories.upvote_repository import UpvoteRepository


async def _count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar()


@pytest.fixture
async def post_id(db_session, create_user) -> int:
    author_id = await create_user("author")
    post = await PostService(db_session).create_post(
        author_id=author_id, title="Upvote me", content="please"
    )
    return post.id


@pytest.mark.asyncio
async def test_toggle_post_upvote_twice_restores_points(db_session, create_user, post_id):
    """Test that two sequential toggles return to the original state."""
    user_id = await create_user("voter")
    service = UpvoteService(db_session)

    added = await service.toggle_post_upvote(post_id, user_id)
    assert added.points == 1
    assert added.is_upvoted is True
    assert await _count(db_session, PostUpvote) == 1

    removed = await service.toggle_post_upvote(post_id, user_id)
    assert removed.points == 0
    assert removed.is_upvoted is False
    assert await _count(db_session, PostUpvote) == 0

    post = await PostRepository(db_session).get_by_id(post_id)
    assert post.points == 0


@pytest.mark.asyncio
async def test_upvotes_from_different_users_accumulate(db_session, create_user, post_id):
    """Test that each user's upvote is counted independently."""
    service = UpvoteService(db_session)
    voters = [await create_user(f"voter{i}") for i in range(3)]

    for voter_id in voters:
        result = await service.toggle_post_upvote(post_id, voter_id)
        assert result.is_upvoted is True

    assert (await PostRepository(db_session).get_by_id(post_id)).points == 3

    result = await service.toggle_post_upvote(post_id, voters[1])
    assert result.points == 2
    assert result.is_upvoted is False


@pytest.mark.asyncio
async def test_self_upvote_is_permitted(db_session, create_user):
    """Test that authors may upvote their own post."""
    author_id = await create_user("narcissus")
    post = await PostService(db_session).create_post(
        author_id=author_id, title="My own post", content="mine"
    )

    result = await UpvoteService(db_session).toggle_post_upvote(post.id, author_id)
    assert result.points == 1
    assert result.is_upvoted is True


@pytest.mark.asyncio
async def test_toggle_comment_upvote(db_session, create_user, post_id):
    """Test toggling an upvote on a comment adjusts only the comment."""
    user_id = await create_user("voter")
    comment = await CommentService(db_session).create_top_level_comment(
        post_id, user_id, "nice post"
    )
    service = UpvoteService(db_session)

    result = await service.toggle_comment_upvote(comment.id, user_id)
    assert result.points == 1
    assert result.is_upvoted is True
    assert await _count(db_session, CommentUpvote) == 1
    assert (await PostRepository(db_session).get_by_id(post_id)).points == 0

    result = await service.toggle_comment_upvote(comment.id, user_id)
    assert result.points == 0
    assert result.is_upvoted is False
    assert (await CommentRepository(db_session).get_by_id(comment.id)).points == 0


@pytest.mark.asyncio
async def test_toggle_on_missing_post_leaves_no_row(db_session, create_user):
    """Test that toggling on an unknown post is NotFound and inserts nothing."""
    user_id = await create_user("voter")

    with pytest.raises(NotFoundError):
        await UpvoteService(db_session).toggle_post_upvote(31337, user_id)

    assert await _count(db_session, PostUpvote) == 0


@pytest.mark.asyncio
async def test_toggle_on_missing_comment_leaves_no_row(db_session, create_user):
    """Test that toggling on an unknown comment is NotFound and inserts nothing."""
    user_id = await create_user("voter")

    with pytest.raises(NotFoundError):
        await UpvoteService(db_session).toggle_upvote(UpvoteTarget.COMMENT, 31337, user_id)

    assert await _count(db_session, CommentUpvote) == 0


@pytest.mark.asyncio
async def test_duplicate_upvote_row_violates_unique_constraint(db_session, create_user, post_id):
    """Test that the storage layer refuses a second row for the same user and post."""
    user_id = await create_user("voter")
    repo = UpvoteRepository(db_session)

    await repo.add(UpvoteTarget.POST, user_id, post_id)
    with pytest.raises(IntegrityError):
        await repo.add(UpvoteTarget.POST, user_id, post_id)
    await db_session.rollback()


@pytest.mark.asyncio
async def test_concurrent_duplicate_insert_is_a_conflict(
    db_session, create_user, post_id, monkeypatch
):
    """Test that losing the insert race raises ConflictError and rolls back points."""
    user_id = await create_user("voter")
    service = UpvoteService(db_session)
    await service.toggle_post_upvote(post_id, user_id)

    # Simulate a concurrent toggle that read "no upvote" before ours committed
    async def stale_find(self, target, user_id, entity_id):
        return None

    monkeypatch.setattr(UpvoteRepository, "find", stale_find)

    with pytest.raises(ConflictError):
        await service.toggle_post_upvote(post_id, user_id)

    assert (await PostRepository(db_session).get_by_id(post_id)).points == 1
    assert await _count(db_session, PostUpvote) == 1


@pytest.mark.asyncio
async def test_vanished_upvote_on_removal_is_a_conflict(
    db_session, create_user, post_id, monkeypatch
):
    """Test that a row deleted out from under the toggle rolls the decrement back."""
    user_id = await create_user("voter")
    service = UpvoteService(db_session)
    await service.toggle_post_upvote(post_id, user_id)

    async def already_removed(self, target, upvote_id):
        return False

    monkeypatch.setattr(UpvoteRepository, "remove", already_removed)

    with pytest.raises(ConflictError):
        await service.toggle_post_upvote(post_id, user_id)

    assert (await PostRepository(db_session).get_by_id(post_id)).points == 1
