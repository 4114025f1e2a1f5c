"""Authentication routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.api.deps import get_current_user, get_optional_user
from newsboard.api.schemas.auth import Credentials, TokenResponse, UserInfoResponse
from newsboard.domain.services.auth_service import AuthService
from newsboard.persistence.database import get_db
from newsboard.persistence.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: Credentials,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Create an account and return an access token."""
    service = AuthService(db)
    user = await service.signup(credentials.username, credentials.password)
    return TokenResponse(
        access_token=service.issue_token(user),
        user_id=user.id,
        username=user.username,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: Credentials,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Exchange username and password for an access token."""
    service = AuthService(db)
    user = await service.login(credentials.username, credentials.password)
    return TokenResponse(
        access_token=service.issue_token(user),
        user_id=user.id,
        username=user.username,
    )


@router.get("/me", response_model=UserInfoResponse)
async def get_current_user_info(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserInfoResponse:
    """Get current authenticated user information."""
    return UserInfoResponse(id=current_user.id, username=current_user.username)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> Response:
    """End the caller's session.

    Access tokens are stateless JWTs, so there is nothing to revoke on the
    server; the client discards its token. Always succeeds.
    """
    if viewer is not None:
        logger.info(f"User {viewer.id} logged out")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
