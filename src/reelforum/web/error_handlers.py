import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from reelforum.errors import (
    AccessDeniedError,
    AuthenticationError,
    CommentNotFoundError,
    ConflictError,
    NotFoundError,
    ParentNotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: subclasses must precede their bases
USER_ERROR_RESPONSES: list[tuple[type[Exception], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (UnauthorizedError, 403, "unauthorized"),
    (AccessDeniedError, 403, "access_denied"),
    (ParentNotFoundError, 404, "parent_not_found"),
    (CommentNotFoundError, 404, "comment_not_found"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
    (ValidationError, 400, "validation_error"),
]


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


def resolve_user_error(exc: Exception) -> tuple[int, str]:
    """Status code and error type for a UserError."""
    for error_class, status_code, error_type in USER_ERROR_RESPONSES:
        if isinstance(exc, error_class):
            return status_code, error_type
    return 400, "bad_request"


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    status_code, error_type = resolve_user_error(exc)
    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
