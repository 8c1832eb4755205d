#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain exceptions are raised by the core services (core.exceptions) and
translated here into a consistent JSON error body.
"""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from core.exceptions import (
    ServiceException,
    NotFoundException,
    ValidationException,
    ForbiddenException,
    StateConflictException,
)

logger = logging.getLogger(__name__)


def status_code_for(exc: ServiceException) -> int:
    if isinstance(exc, NotFoundException):
        return 404
    if isinstance(exc, ForbiddenException):
        return 403
    if isinstance(exc, (ValidationException, StateConflictException)):
        return 400
    return 500


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    if isinstance(exc, StateConflictException) and exc.current_status:
        content["current_status"] = exc.current_status

    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle HTTP exceptions (raised by routes or by routing itself) with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        },
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
