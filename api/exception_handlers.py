"""
Exception handlers for the FastAPI application.

Converts application exceptions and request validation failures into
``{success: false, message}`` responses.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from application.exceptions import FitTrackError

logger = logging.getLogger(__name__)

# Leading location segments that say where a field came from, not which field
_SOURCES = {"body", "query", "path", "header", "cookie"}


def create_error_response(status_code: int, message: str) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def format_validation_errors(errors) -> str:
    """
    Flatten pydantic error dicts into one readable message.

    >>> format_validation_errors([{"loc": ("body", "name"), "msg": "Field required"}])
    'name: Field required'
    """
    parts = []
    for error in errors:
        loc = [str(x) for x in error.get("loc", ())]
        if loc and loc[0] in _SOURCES:
            loc = loc[1:]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts) or "Invalid request"


async def fittrack_error_handler(request: Request, exc: FitTrackError) -> JSONResponse:
    """Handle all FitTrackError exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return create_error_response(exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies, query strings and path parameters."""
    message = format_validation_errors(exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return create_error_response(400, message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return create_error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI, handle_unexpected: Optional[bool] = True) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
        handle_unexpected: Also register the catch-all handler for other exceptions
    """
    app.add_exception_handler(FitTrackError, fittrack_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Must be last as it catches all Exception types
    if handle_unexpected:
        app.add_exception_handler(Exception, generic_exception_handler)
