# api/errors.py
import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import (
    InternalError, RangeNotSatisfiableError, SecurityViolationError,
    StorefrontError, UnauthorizedError
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code,
        },
        headers=headers,
    )


async def storefront_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render core errors with their own status and message."""
    if not isinstance(exc, StorefrontError):
        return await unhandled_exception_handler(request, exc)

    headers: Dict[str, str] = {"Cache-Control": "no-store"}
    if isinstance(exc, RangeNotSatisfiableError):
        headers["Content-Range"] = f"bytes */{exc.file_size}"
    elif isinstance(exc, UnauthorizedError):
        headers["WWW-Authenticate"] = "Bearer"

    if isinstance(exc, SecurityViolationError):
        logger.error(f"Security violation on {request.url.path}")
    elif exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")

    return error_response(exc.status_code, exc.message, headers)


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log store faults with context and hide the details from the client."""
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Give framework-raised HTTP errors the same shape as core errors."""
    if not isinstance(exc, StarletteHTTPException):
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)
    return error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with detailed error messages."""
    if not isinstance(exc, RequestValidationError):
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "message": "Validation error",
            "details": errors,
            "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log any other fault with its traceback and return the generic 500 body."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        InternalError.default_message,
        {"Cache-Control": "no-store"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
