"""FastAPI dependencies for resolving the caller's identity."""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.core.errors import UnauthorizedError
from newsboard.core.request_context import set_user_context
from newsboard.domain.pagination import PageRequest, SortField, SortOrder
from newsboard.domain.services.auth_service import AuthService
from newsboard.persistence.database import get_db
from newsboard.persistence.models.user import User
from newsboard.settings import settings

security = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Resolve the viewer for read endpoints.

    A token that does not resolve to a user counts as no token, so the
    request is served anonymously.
    """
    if credentials is None:
        return None

    user = await AuthService(db).resolve_token(credentials.credentials)
    if user is not None:
        set_user_context(user.id)
    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated user.

    Raises:
        UnauthorizedError: If the request carries no valid token
    """
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user


def get_page_request(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: SortField = Query(SortField.POINTS),
    order: SortOrder = Query(SortOrder.DESC),
) -> PageRequest:
    """Parse pagination and sort query parameters."""
    return PageRequest(page=page, limit=limit, sort_by=sort_by, order=order)
