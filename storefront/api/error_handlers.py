"""Exception handlers mapping every failure to an ``{error, message}`` body."""

import logging
import traceback
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.config import get_settings
from storefront.errors import AppError

logger = logging.getLogger(__name__)
settings = get_settings()

GENERIC_MESSAGE = "Something went wrong"


def create_error_response(
    status_code: int, error: str, message: str, extra: dict | None = None
) -> JSONResponse:
    """Create standardized error response."""
    content = {"error": error, "message": message}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def _internal_response(exc: Exception, message: str) -> JSONResponse:
    if settings.is_development:
        return create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            str(exc) or message,
            {"stack": traceback.format_exception(exc)},
        )
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", message
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.detail})")
            extra = {"detail": exc.detail} if settings.is_development and exc.detail else None
            return create_error_response(exc.status_code, exc.error, exc.message, extra)
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        return create_error_response(exc.status_code, exc.error, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info(f"{request.method} {request.url.path} -> 400 {message}")
        return create_error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Cannot {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        error = HTTPStatus(exc.status_code).phrase
        return create_error_response(exc.status_code, error, message)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
        return _internal_response(exc, "Database error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception: {type(exc).__name__}: {exc}", exc_info=exc
        )
        return _internal_response(exc, GENERIC_MESSAGE)
