"""
Error handling for the RouteWise API.

Every failure response has the same shape, ``{"success": false, "error": str}``.
Details (stack traces, upstream bodies, credentials) go to the logs only.
"""

import hashlib
import logging
import sys
import time
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from routewise.geocoding.errors import GeocodingError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    """Build the standard failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _error_id(request: Request) -> str:
    return hashlib.md5(f"{time.time()}-{request.url.path}".encode()).hexdigest()[:8]


def format_stack_trace(stack_trace: str) -> str:
    """Indent a stack trace so it reads as one block in the log."""
    lines = stack_trace.split('\n')
    formatted_lines = []
    for line in lines:
        if line.strip():
            formatted_lines.append(f"  │ {line}")

    return "\n".join(formatted_lines)


async def error_handler_middleware(request: Request, call_next):
    """
    Catch exceptions no handler dealt with and return a generic 500 envelope.
    """
    error_id = _error_id(request)

    try:
        return await call_next(request)
    except Exception as exc:
        exc_type, exc_value, exc_traceback = sys.exc_info()
        stack_trace = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        formatted_trace = format_stack_trace(stack_trace)

        error_msg = f"❌ ERR#{error_id}: {request.method} {request.url.path} - {exc.__class__.__name__}: {exc}"
        logger.error(f"{error_msg}\n╭─ Stack Trace ─────────────────────────╮\n{formatted_trace}\n╰───────────────────────────────────────╯")

        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_error_handlers(app):
    """
    Configure exception handlers for the FastAPI application.
    """
    @app.exception_handler(GeocodingError)
    async def geocoding_exception_handler(request, exc: GeocodingError):
        """Map normalized geocoding failures to status codes."""
        error_id = _error_id(request)
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"⚠️ GEO#{error_id}: {request.method} {request.url.path} - "
            f"{exc.kind.value} ({exc.status_code}): {exc.message}"
        )
        return error_response(exc.status_code, exc.public_message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc):
        """Handler for HTTP exceptions."""
        error_id = _error_id(request)

        if exc.status_code >= 500:
            logger.error(f"❌ HTTP#{error_id}: {request.method} {request.url.path} - {exc.status_code} - {exc.detail}")
            message = "Internal server error"
        else:
            logger.warning(f"⚠️ HTTP#{error_id}: {exc.status_code} - {exc.detail}")
            message = str(exc.detail)

        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handler for request validation errors."""
        error_id = _error_id(request)
        logger.warning(
            f"⚠️ VALID#{error_id}: Validation error on {request.method} {request.url.path}: "
            f"{len(exc.errors())} error(s)"
        )
        return error_response(
            422,
            "Invalid request parameters",
        )
