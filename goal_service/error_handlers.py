"""
Global exception handlers.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

import logging
import traceback

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .models.error_response import ErrorResponse
from .utils.exceptions import HealthGoalsError, InternalError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def health_goals_error_handler(request: Request, exc: HealthGoalsError) -> JSONResponse:
    """
    Convert a HealthGoalsError into an ``{"error": message}`` response.

    4xx errors are logged at WARNING. 5xx errors are logged at ERROR with
    the traceback and sent to Sentry.
    """
    log_context = {
        "error_code": exc.code,
        "status_code": exc.status_code,
        "detail": exc.detail,
        "path": request.url.path,
        "method": request.method,
    }

    if exc.status_code >= 500:
        logger.error(
            f"HealthGoalsError [500-level]: {exc.code} - {exc.message}",
            exc_info=exc,
            extra=log_context,
        )
        sentry_sdk.capture_exception(exc)
    else:
        logger.warning(f"HealthGoalsError: {exc.code} - {exc.message}", extra=log_context)

    error_response = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_response.model_dump())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Reformat FastAPI request validation errors (e.g. a body that is not JSON).

    Only the first error is reported.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = " -> ".join(str(loc) for loc in first.get("loc", ()))
        message = f"Invalid request in '{field}': {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    logger.info(
        f"Validation error: {message}",
        extra={"path": request.url.path, "error_count": len(errors)},
    )

    error_response = ErrorResponse(error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Safety net for any exception not handled elsewhere.

    The exception is wrapped in an InternalError. The full traceback is
    logged, but internal details are never returned to the client.
    """
    internal_error = InternalError(INTERNAL_ERROR_MESSAGE)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "error_code": internal_error.code,
            "exception_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
            "traceback": "".join(traceback.format_exception(exc)),
        },
    )
    sentry_sdk.capture_exception(exc)

    error_response = ErrorResponse(error=internal_error.message)
    return JSONResponse(
        status_code=internal_error.status_code,
        content=error_response.model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the global handlers on an application."""
    app.add_exception_handler(HealthGoalsError, health_goals_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
