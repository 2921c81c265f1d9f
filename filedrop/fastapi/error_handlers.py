"""FastAPI error handlers for filedrop exceptions.

This module provides exception handlers that convert filedrop exceptions
into JSON responses. Validation failures carry a hint for the caller;
storage failures are reported with an opaque message and logged in full.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from filedrop.core.exceptions import (
    ConfigurationError,
    FileDropError,
    S3ConnectionError,
    StorageWriteError,
    UploadTooLargeError,
    UploadValidationError,
)

logger = logging.getLogger(__name__)

STORAGE_FAILURE_MESSAGE = "Failed to upload file to S3"


async def filedrop_exception_handler(
    request: Request,
    exc: FileDropError
) -> JSONResponse:
    """Handle filedrop exceptions.

    Args:
        request: The FastAPI request
        exc: The filedrop exception

    Returns:
        JSONResponse with error details
    """
    message = exc.message

    # Determine status code based on exception type
    if isinstance(exc, UploadTooLargeError):
        status_code = 413
        error_type = "payload_too_large"
    elif isinstance(exc, UploadValidationError):
        status_code = 400
        error_type = "validation_error"
    elif isinstance(exc, StorageWriteError):
        status_code = 500
        error_type = "storage_error"
        message = STORAGE_FAILURE_MESSAGE
    elif isinstance(exc, S3ConnectionError):
        status_code = 500
        error_type = "storage_unavailable"
        message = STORAGE_FAILURE_MESSAGE
    elif isinstance(exc, ConfigurationError):
        status_code = 500
        error_type = "configuration_error"
    else:
        status_code = 500
        error_type = "internal_error"

    if status_code >= 500:
        cause = getattr(exc, "original_error", None) or exc
        logger.error(f"{request.method} {request.url.path} failed ({error_type}): {cause}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({error_type}): {exc.message}")

    content = {
        "error": message,
        "code": error_type,
    }

    # Hints only go back to the client for its own mistakes
    if status_code < 500 and exc.hint:
        content["hint"] = exc.hint
    if isinstance(exc, UploadValidationError) and exc.field:
        content["field"] = exc.field

    return JSONResponse(status_code=status_code, content=content)


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The FastAPI request
        exc: The exception

    Returns:
        JSONResponse with generic error message
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    # In production, don't expose internal error details
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred. Please try again later.",
            "code": "internal_error",
        },
    )


def register_error_handlers(app: FastAPI, include_generic: bool = False) -> None:
    """Register all filedrop error handlers with a FastAPI app.

    Args:
        app: The FastAPI application
        include_generic: Whether to include a generic handler for all exceptions
    """
    app.add_exception_handler(FileDropError, filedrop_exception_handler)

    # Optionally register generic handler
    if include_generic:
        app.add_exception_handler(Exception, generic_exception_handler)
