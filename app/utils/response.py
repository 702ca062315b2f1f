import logging

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.utils.exceptions import ServiceError

logger = logging.getLogger(__name__)


def create_response(status_code: int = status.HTTP_200_OK, **payload) -> JSONResponse:
    """Return ``{"success": true, ...payload}`` with the given status code."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, **jsonable_encoder(payload)},
    )


def error_response(error: str, status_code: int, details=None) -> JSONResponse:
    content = {"success": False, "error": error}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


def handle_exception(error: Exception, fallback_message: str = "Internal server error") -> JSONResponse:
    """Coerce raised errors into the shared response structure."""
    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return error_response(detail, error.status_code)

    if isinstance(error, ServiceError):
        return error_response(error.message, error.status_code, error.details)

    logger.exception("%s: %s", fallback_message, error)
    return error_response(fallback_message, status.HTTP_500_INTERNAL_SERVER_ERROR, details=_error_details(error))


def _error_details(error: Exception) -> str:
    # Database errors carry the SQL statement and its parameters; keep those in the log
    if isinstance(error, SQLAlchemyError):
        orig = getattr(error, "orig", None)
        return str(orig) if orig is not None else type(error).__name__
    return str(error)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in exc.errors()
    ]
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, errors)
    return error_response("Validation failed", status.HTTP_400_BAD_REQUEST, details=errors)
