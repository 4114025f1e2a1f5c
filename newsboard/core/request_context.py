"""Request-scoped context used to stamp log records."""

from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id_var: ContextVar[Optional[int]] = ContextVar("user_id", default=None)


def set_request_id(request_id: str | None) -> None:
    """Set the current request id."""
    request_id_var.set(request_id)


def get_request_id() -> str | None:
    """Get the current request id."""
    return request_id_var.get()


def set_user_context(user_id: int | None) -> None:
    """Set the authenticated user for the current request.

    Args:
        user_id: User ID to set in context
    """
    user_id_var.set(user_id)


def get_user_context() -> int | None:
    """Get the authenticated user for the current request."""
    return user_id_var.get()


def clear_request_context() -> None:
    """Clear the current request context."""
    request_id_var.set(None)
    user_id_var.set(None)
