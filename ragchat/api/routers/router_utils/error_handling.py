"""
API error handling utilities.

Maps the application exception hierarchy to status codes and the
`{"error": "<message>"}` body used by every non-streaming failure, plus a
decorator that applies the mapping to route handlers.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from ragchat.core.exceptions import (
    AuthenticationError,
    DocumentNotFoundError,
    ParsingError,
    RagChatError,
    SessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

INTERNAL_ERROR_MESSAGE = "Internal Server Error"

_STATUS_BY_ERROR: list[tuple[type[RagChatError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ParsingError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (SessionNotFoundError, status.HTTP_404_NOT_FOUND),
    (DocumentNotFoundError, status.HTTP_404_NOT_FOUND),
]


def error_body(message: str, status_code: int) -> JSONResponse:
    """Structured error response."""
    return JSONResponse(status_code=status_code, content={"error": message})


def error_response(exc: Exception) -> JSONResponse:
    """
    Translate an exception into a structured error response.

    Client errors carry the exception message; server errors carry a
    generic message and are logged with full detail.
    """
    if isinstance(exc, RagChatError):
        for error_type, status_code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                logger.warning(
                    f"Request rejected: {exc.message}",
                    extra={"status_code": status_code, "error_type": type(exc).__name__},
                )
                return error_body(exc.message, status_code)

    logger.error(
        f"Request failed: {type(exc).__name__}: {exc}",
        extra={"error_type": type(exc).__name__},
    )
    return error_body(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def handle_api_errors(func: F) -> F:
    """
    Decorator turning exceptions raised by a route handler into structured errors.

    Only covers the handler body; once a StreamingResponse is returned,
    failures are signalled inside the stream.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            return error_response(e)

    return wrapper  # type: ignore
