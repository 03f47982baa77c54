"""Error Handlers: global exception handlers for the Showroom API.

Invariants:
    - ShowroomError -> structured JSON with error code, message, severity
    - RequestValidationError -> 400 with field-level error details
    - HTTPException with a dict detail (e.g. 413 from the body limit) -> that dict as the body
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Client mistakes (400/409/413) are reported apart from store failures (500)
    - Store failures carry the driver's message text in error.message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from showroom.core.errors import (
    ErrorCategory, ErrorSeverity, ShowroomError, format_validation_details,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_showroom_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_showroom_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ShowroomError)
    async def showroom_error_handler(request: Request, exc: ShowroomError):
        """Handle all Showroom domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"ShowroomError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "collection": exc.context.collection,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Envelope-shaped details are sent as-is; anything else keeps FastAPI's format."""
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            logger.warning(
                f"HTTP {exc.status_code} on {request.url.path}",
                extra={
                    "error_code": exc.detail["error"].get("code"),
                    "path": request.url.path,
                },
            )
            return JSONResponse(
                status_code=exc.status_code, content=exc.detail,
                headers=getattr(exc, "headers", None),
            )
        return await http_exception_handler(request, exc)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": format_validation_details(exc.errors()),
        },
    }
