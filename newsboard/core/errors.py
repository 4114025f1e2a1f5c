"""Domain error taxonomy.

Every error raised by the stores carries the HTTP status it maps to, so the
API layer renders them with a single exception handler.
"""


class NewsboardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(NewsboardError):
    """Referenced post, comment, or upvote target does not exist."""

    status_code = 404


class ConflictError(NewsboardError):
    """A uniqueness constraint was violated (duplicate username or vote race)."""

    status_code = 409


class ValidationFailure(NewsboardError):
    """Caller-supplied data failed a constraint check."""

    status_code = 400


class UnauthorizedError(NewsboardError):
    """No resolved identity for an operation that requires one."""

    status_code = 401
