"""Exception handlers mapping catalog errors to JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from carverse.application.errors import CatalogError
from carverse.infrastructure.config.settings import settings
from carverse.infrastructure.logging.logger import log_event, logger


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle catalog errors with their own status and body."""
    log_event(
        request_id=getattr(request.state, "request_id", "-"),
        component="http",
        level=logging.WARNING if exc.status_code < 500 else logging.ERROR,
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies as 400."""
    errors = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle anything else as 500; detail only in debug mode."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")

    content = {"message": "Internal server error"}
    if settings.debug_mode:
        content["detail"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
