#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class ValidationException(ServiceException):
    """Raised when a request body fails a business-rule check."""
    pass


class ProfileNotFoundException(ServiceException):
    """Raised when a demob profile is not found."""
    pass


class MatchNotFoundException(ServiceException):
    """Raised when a match is not found."""
    pass


class ProjectNotFoundException(ServiceException):
    """Raised when a project is not found."""
    pass


def _error_body(error, error_type: str) -> dict:
    return {
        "success": False,
        "error": error,
        "type": error_type
    }


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
    status_code = 500
    if isinstance(exc, (ProfileNotFoundException, MatchNotFoundException, ProjectNotFoundException)):
        status_code = 404
    elif isinstance(exc, ValidationException):
        status_code = 400

    if status_code == 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=_error_body(str(exc), exc.__class__.__name__)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTPException"),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report request validation failures as 400 with a one-line message.

    The message names the first offending field, e.g.
    "Invalid request: body.demobProfile - Field required".
    """
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} - {first.get('msg', 'invalid value')}"

    return JSONResponse(
        status_code=400,
        content=_error_body(message, "ValidationException")
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
        content=_error_body("Internal server error", "InternalError")
    )


def register_exception_handlers(app) -> None:
    """Attach all handlers to a FastAPI app."""
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
