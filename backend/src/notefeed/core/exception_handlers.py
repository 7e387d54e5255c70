"""
Exception handlers.

Convert ``NoteFeedError`` subclasses and request validation failures into
``ErrorResponse`` bodies with the status code of their ``ErrorKind``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import ErrorKind, NoteFeedError, ValidationError
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(exc: NoteFeedError) -> JSONResponse:
    body = ErrorResponse(message=exc.message, kind=exc.kind.value, data=exc.data)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


async def notefeed_error_handler(request: Request, exc: NoteFeedError) -> JSONResponse:
    """Map an application error to its status code."""
    log_extra = {
        "kind": exc.kind.value,
        "error_message": exc.message,
        "status": exc.status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if exc.status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    return error_response(exc)


_SCALARS = (str, int, float, bool, type(None))


def _violations(exc: RequestValidationError):
    violations = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", []) if part not in ("body", "query", "path", "form")]
        violations.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", "Validation error"),
                "value": err.get("input") if isinstance(err.get("input"), _SCALARS) else None,
            }
        )
    return violations


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI request validation failures as ``ValidationError``."""
    error = ValidationError(violations=_violations(exc))
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(error.violations),
        },
    )
    return error_response(error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all returning a generic storage error body."""
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )
    body = ErrorResponse(message="An unexpected error occurred", kind=ErrorKind.STORAGE.value)
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(NoteFeedError, notefeed_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
