"""
API Error Handling

Maps the service exceptions to short, non-technical `{"error": ...}` bodies.
Details (upstream status, exception text) only go to the logs.
"""

from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sidekick.api.cors import CORS_HEADERS
from sidekick.clients.completion import CompletionClientError
from sidekick.core.exceptions import ConfigurationError
from sidekick.core.logging import get_logger

logger = get_logger(__name__)

MESSAGE_INVALID_REQUEST: Final[str] = (
    "Invalid request. Please send a non-empty list of messages."
)
MESSAGE_NOT_CONFIGURED: Final[str] = (
    "The assistant is not configured. Please contact the site maintainers."
)
MESSAGE_UNEXPECTED: Final[str] = "Something went wrong. Please try again."


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an `{"error": message}` response with CORS headers."""
    return JSONResponse(
        content={"error": message},
        status_code=status_code,
        headers=CORS_HEADERS,
    )


async def handle_completion_error(request: Request, exc: CompletionClientError) -> JSONResponse:
    logger.warning(
        "completion_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        upstream_status=exc.upstream_status,
    )
    return error_response(exc.status_code, exc.public_message)


async def handle_configuration_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("configuration_error", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_NOT_CONFIGURED)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request", path=request.url.path, errors=len(exc.errors()))
    return error_response(status.HTTP_400_BAD_REQUEST, MESSAGE_INVALID_REQUEST)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, MESSAGE_UNEXPECTED)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the service exception handlers to the app."""
    app.add_exception_handler(CompletionClientError, handle_completion_error)  # type: ignore[arg-type]
    app.add_exception_handler(ConfigurationError, handle_configuration_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
