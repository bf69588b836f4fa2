"""FastAPI exception handlers for custom exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from core.exceptions import (
    XmlVaultError,
    MethodNotAllowedError,
    RequestValidationError,
    PayloadDecodeError,
)


def status_for(exc: XmlVaultError) -> int:
    """Map an XMLVault exception to its HTTP status code."""
    if isinstance(exc, MethodNotAllowedError):
        return status.HTTP_405_METHOD_NOT_ALLOWED
    if isinstance(exc, (RequestValidationError, PayloadDecodeError)):
        return status.HTTP_400_BAD_REQUEST
    # body read, storage and configuration failures; missing objects included
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def xmlvault_exception_handler(request: Request, exc: XmlVaultError) -> PlainTextResponse:
    """Handle XMLVault-specific exceptions."""
    status_code = status_for(exc)
    cause = exc.__cause__

    log = logger.bind(method=request.method, path=request.url.path, status=status_code)
    if status_code >= 500:
        log.error(
            "{type} - {message} (cause: {cause})",
            type=type(exc).__name__,
            message=exc.message,
            cause=f"{type(cause).__name__}: {cause}" if cause else "-",
            details=exc.details,
        )
    else:
        log.warning(
            "Rejected request: {type} - {message}",
            type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        )

    return PlainTextResponse(exc.message, status_code=status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.opt(exception=exc).error(
        "Unhandled exception on {method} {path}",
        method=request.method,
        path=request.url.path,
    )
    return PlainTextResponse("internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = ["status_for", "unhandled_exception_handler", "xmlvault_exception_handler"]
