"""
Authentication exceptions for user sessions and signed webhooks.
"""
from typing import Any, Dict, Optional
from fastapi import status

from checkin.exceptions import CheckinException, ConfigurationError


class AuthenticationError(CheckinException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidTokenError(AuthenticationError):
    """Raised when the provided token can't be resolved to a user."""

    def __init__(self, message: str = "Invalid or expired token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


# =============================================================================
# Webhook signature errors
# =============================================================================

class WebhookSignatureError(AuthenticationError):
    """Base class for rejected webhook deliveries."""


class MissingSignatureError(WebhookSignatureError):
    def __init__(self):
        super().__init__("Missing signature header")


class MalformedSignatureError(WebhookSignatureError):
    def __init__(self, message: str = "Invalid signature format"):
        super().__init__(message)


class SignatureExpiredError(WebhookSignatureError):
    def __init__(self):
        super().__init__("Request expired")


class InvalidSignatureError(WebhookSignatureError):
    def __init__(self):
        super().__init__("Invalid signature")


class WebhookSecretNotConfiguredError(ConfigurationError):
    """The deployment has no webhook secret; this is not the sender's fault."""

    def __init__(self):
        super().__init__("ELEVENLABS_WEBHOOK_SECRET", message="Webhook secret not configured")
