"""
Request ID middleware for tracking requests across log lines.

Generates a short hexadecimal ID (8 characters) for each request, making it
easy to filter logs by request. The authenticated user ID is tracked the
same way once the auth dependency resolves it.
"""

import logging
import os
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Context variable to store the current request ID
_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Context variable to store the authenticated user ID
_user_id_ctx: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


def generate_request_id() -> str:
    """Generate a random 8-character hexadecimal ID."""
    return os.urandom(4).hex()


def get_request_id() -> Optional[str]:
    """Get the current request ID."""
    return _request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the current request ID.

    Args:
        request_id: Optional ID to set. If None, generates a new one.

    Returns:
        The request ID that was set.
    """
    if request_id is None:
        request_id = generate_request_id()
    _request_id_ctx.set(request_id)
    return request_id


def clear_request_id() -> None:
    """Clear the current request ID."""
    _request_id_ctx.set(None)


def get_user_id() -> Optional[str]:
    """Get the current authenticated user ID."""
    return _user_id_ctx.get()


def set_user_id(user_id: Optional[str]) -> Optional[str]:
    """Set the current authenticated user ID."""
    _user_id_ctx.set(user_id)
    return user_id


def clear_user_id() -> None:
    """Clear the current authenticated user ID."""
    _user_id_ctx.set(None)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each HTTP request."""

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_id()
            clear_user_id()


class RequestIDFilter(logging.Filter):
    """
    Logging filter that adds request_id and user_id to log records.

    Used by the formatters in logging_config.yaml.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = get_request_id()
        record.request_id = request_id if request_id else "--------"
        record.user_id = get_user_id()
        return True
