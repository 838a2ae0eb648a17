"""
Custom exception classes and error handling.

This module provides custom exceptions and utilities for consistent
error handling across the application.
"""
import logging
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CheckinException(Exception):
    """Base exception for all check-in backend errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(CheckinException):
    """Raised when a required environment value is absent."""

    def __init__(self, setting: str, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        message = message or f"{setting} environment variable not configured"
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)
        self.setting = setting


class UpstreamUnavailableError(CheckinException):
    """Raised when a downstream provider fails or returns a non-2xx status."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, status_code, details)
        self.provider = provider


class MalformedInputError(CheckinException):
    """Raised when a request body doesn't parse as the expected JSON shape."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


# =============================================================================
# Exception Handlers
# =============================================================================

async def checkin_exception_handler(request: Request, exc: CheckinException) -> JSONResponse:
    """Handle CheckinException instances."""
    content: Dict[str, Any] = {"error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {"message": str(exc)}
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Call this during app initialization:
        from checkin.exceptions import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(CheckinException, checkin_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
