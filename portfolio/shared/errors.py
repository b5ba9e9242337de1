"""
Error kinds and secure error handling

Every failure leaves the API with the same body shape:
{"error": <message>, "category": <category>}. Unexpected errors are logged in
full server-side and answered with a sanitized message.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    category = "server_error"
    default_message = "Request failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class StoreUnavailable(APIError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    category = "database"
    default_message = "Database not connected"


class InvalidIdentifier(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    category = "client_error"
    default_message = "Invalid project ID format"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    category = "client_error"
    default_message = "Project not found"


class ValidationError(APIError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    category = "validation"
    default_message = "Project validation failed"


def error_response(message: str, category: str, status_code: int, **extra) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
            **extra,
        },
    )


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Fetching projects")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    # Return sanitized message for client
    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


async def api_error_handler(request: Request, exc: APIError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.message, exc.category, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    fields = [_field_name(err.get("loc", ())) for err in errors]
    if errors:
        first = errors[0]
        message = f"{_field_name(first.get('loc', ()))}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request body"
    logger.info(f"{request.method} {request.url.path} -> 400: {message}")
    return error_response(
        message=message,
        category="validation",
        status_code=status.HTTP_400_BAD_REQUEST,
        fields=fields,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = (
        detail.get("message") if isinstance(detail, dict) else str(detail)
    ) or "Request failed."

    if exc.status_code >= 500:
        category = "server_error"
    else:
        category = "client_error"

    return error_response(message=message, category=category, status_code=exc.status_code)


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    sanitized, _ = log_and_sanitize_error(
        exc,
        f"{request.method} {request.url.path}",
        "A database error occurred while processing the request.",
    )
    return error_response(
        message=sanitized,
        category="database",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def setup_error_handlers(app: FastAPI) -> None:
    """
    Register the uniform error handlers on a FastAPI app.

    Must run before the CORS and header middleware are added: middleware added
    later wraps this one, so the generic 500 still gets their headers.
    """

    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unexpected error on %s", request.url.path)
            return error_response(
                message="Something broke!",
                category="server_error",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
