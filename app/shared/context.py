"""Request context management using contextvars.

Provides async-safe storage for request-scoped data (request id and
organization id) so log records can carry them without threading the
values through every call.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)
_current_organization_id: ContextVar[str | None] = ContextVar(
    "current_organization_id", default=None
)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the current request id; returns the token for reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request id that was current before set_request_id."""
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _current_request_id.get()


def set_organization_id(organization_id: str | None) -> None:
    """Set the organization the current request acts for."""
    _current_organization_id.set(organization_id)


def get_organization_id() -> str | None:
    """Return the current organization id, or None if not resolved yet."""
    return _current_organization_id.get()
