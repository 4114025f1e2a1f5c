"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from newsboard.core.auth import create_access_token
from newsboard.persistence.database import Base, get_db, transaction
from newsboard.persistence.models import *  # noqa: F401, F403
from newsboard.persistence.repositories.user_repository import UserRepository


@pytest.fixture
async def db_session():
    """Create a test database session."""
    # Use in-memory SQLite for testing
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def client(db_session):
    """Create a test API client bound to the test session."""
    from newsboard.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db_session):
    """Factory that inserts a user and returns its id.

    Skips bcrypt; these users authenticate with tokens only.
    """

    async def _create_user(username: str) -> int:
        async with transaction(db_session):
            user = await UserRepository(db_session).add(
                username=username, hashed_password="not-a-real-hash"
            )
        return user.id

    return _create_user


@pytest.fixture
def auth_headers():
    """Factory for bearer headers for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        token = create_access_token(data={"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
