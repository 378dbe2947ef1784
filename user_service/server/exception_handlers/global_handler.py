"""
Exception Handlers for FastAPI Application.

This module maps the service's domain errors to HTTP responses and provides
a global handler that catches all unhandled exceptions, logging detailed
information including error ID, request context, and full traceback.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from user_service.core.errors import NotFoundEntityError, NotUniqueEntityError
from user_service.core.logging_config import get_logger
from user_service.core.monitoring import log_error

logger = get_logger(__name__)


async def not_found_exception_handler(request: Request, exc: NotFoundEntityError) -> JSONResponse:
    """Answer 404 with the error message."""
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def not_unique_exception_handler(request: Request, exc: NotUniqueEntityError) -> JSONResponse:
    """Answer 409 with the error message."""
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This function should be called during application initialization to set up
    all custom exception handlers.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(NotFoundEntityError, not_found_exception_handler)
    app.add_exception_handler(NotUniqueEntityError, not_unique_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
