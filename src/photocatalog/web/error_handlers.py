import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from photocatalog.errors import (
    AuthorizeError,
    NotFoundError,
    StorageError,
    UserNotAllowedError,
    UserNotAuthorizedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def app_error_handler(request: Request, exc: Exception) -> Response:
    """Map every application error to its status code.

    Server-side errors are logged with their cause and answered with a fixed
    message, so provider and storage details never reach the client.
    """
    match exc:
        case UserNotAuthorizedError():
            return create_json_error_response(401, str(exc), "user_not_authorized")
        case UserNotAllowedError():
            return create_json_error_response(401, str(exc), "user_not_allowed")
        case NotFoundError():
            return create_json_error_response(404, str(exc), "not_found")
        case ValidationError():
            return create_json_error_response(400, str(exc), "validation_error")
        case AuthorizeError():
            logger.error("Authorization failed", path=request.url.path, error=str(exc), exc_info=exc)
            return create_json_error_response(500, "unexpected error while authorizing", "authorize_error")
        case StorageError():
            logger.error("Object store request failed", path=request.url.path, error=str(exc), exc_info=exc)
            return create_json_error_response(500, "failed to request the object store", "storage_error")
        case _:
            return await general_exception_handler(request, exc)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error", error=str(exc), exc_info=exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
