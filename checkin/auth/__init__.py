"""
Authentication for browser sessions and signed provider webhooks.
"""
from .dependencies import AuthUser, get_current_user, get_supabase_auth
from .exceptions import (
    AuthenticationError,
    InvalidTokenError,
    WebhookSignatureError,
    MissingSignatureError,
    MalformedSignatureError,
    SignatureExpiredError,
    InvalidSignatureError,
    WebhookSecretNotConfiguredError,
)
from .supabase_client import SupabaseAuthClient, supabase_auth

__all__ = [
    "AuthUser",
    "get_current_user",
    "get_supabase_auth",
    "AuthenticationError",
    "InvalidTokenError",
    "WebhookSignatureError",
    "MissingSignatureError",
    "MalformedSignatureError",
    "SignatureExpiredError",
    "InvalidSignatureError",
    "WebhookSecretNotConfiguredError",
    "SupabaseAuthClient",
    "supabase_auth",
]
