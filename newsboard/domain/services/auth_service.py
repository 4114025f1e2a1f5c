"""Minimal identity provider: accounts, passwords, and bearer tokens."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.auth import create_access_token, decode_access_token
from newsboard.core.errors import ConflictError, UnauthorizedError
from newsboard.core.password import hash_password, verify_password
from newsboard.persistence.database import transaction
from newsboard.persistence.models.user import User
from newsboard.persistence.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for signing users up, logging them in, and resolving tokens."""

    def __init__(self, session: AsyncSession):
        """Initialize auth service.

        Args:
            session: Database session
        """
        self.session = session
        self.users = UserRepository(session)

    @staticmethod
    def issue_token(user: User) -> str:
        """Create an access token for a user (sub must be a string for JWT)."""
        return create_access_token(data={"sub": str(user.id)})

    async def signup(self, username: str, password: str) -> User:
        """Create an account.

        Raises:
            ConflictError: If the username is taken
        """
        hashed_password = hash_password(password)
        async with transaction(self.session):
            try:
                user = await self.users.add(username=username, hashed_password=hashed_password)
            except IntegrityError as e:
                logger.warning(f"Signup rejected, username already used: {username}")
                raise ConflictError("Username already used") from e

        logger.info(f"Created user id={user.id} username={username}")
        return user

    async def login(self, username: str, password: str) -> User:
        """Check credentials.

        Raises:
            UnauthorizedError: If the username is unknown or the password is wrong
        """
        user = await self.users.get_by_username(username)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Incorrect username or password")
        return user

    async def resolve_token(self, token: str) -> User | None:
        """Resolve a bearer token to its user, or None if it is invalid."""
        payload = decode_access_token(token)
        if payload is None:
            return None

        try:
            user_id = int(payload.get("sub"))
        except (ValueError, TypeError):
            return None

        return await self.users.get_by_id(user_id)
