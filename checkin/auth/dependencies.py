"""
FastAPI authentication dependencies.

Provides dependency injection for endpoints that need a signed-in user.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Cookie, Depends, Header

from checkin.auth.config import ACCESS_TOKEN_COOKIE
from checkin.auth.exceptions import AuthenticationError, InvalidTokenError
from checkin.auth.supabase_client import SupabaseAuthClient, supabase_auth

logger = logging.getLogger(__name__)


# =============================================================================
# Models for Auth Context
# =============================================================================

class AuthUser:
    """Supabase user resolved from an access token."""

    def __init__(self, id: str, email: Optional[str] = None, user_metadata: Optional[Dict[str, Any]] = None):
        self.id = id
        self.email = email
        self.user_metadata = user_metadata or {}

    @classmethod
    def from_supabase(cls, data: Dict[str, Any]) -> "AuthUser":
        return cls(
            id=data["id"],
            email=data.get("email"),
            user_metadata=data.get("user_metadata"),
        )


# =============================================================================
# Token Extraction
# =============================================================================

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header.

    Returns None when the header is missing or isn't a Bearer header; the
    session cookie may still authenticate the request.
    """
    if not authorization:
        return None

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None

    return parts[1]


# =============================================================================
# Dependency Functions
# =============================================================================

def get_supabase_auth() -> SupabaseAuthClient:
    """Get the Supabase Auth client."""
    return supabase_auth


async def get_current_user(
    authorization: Optional[str] = Header(None),
    session_token: Optional[str] = Cookie(None, alias=ACCESS_TOKEN_COOKIE),
    auth_client: SupabaseAuthClient = Depends(get_supabase_auth),
) -> AuthUser:
    """
    Get the current authenticated user.

    The session cookie is tried first, then the Bearer token, mirroring how
    the browser may hold either one.

    Usage:
        @router.post("/conversation")
        async def submit(user: AuthUser = Depends(get_current_user)):
            ...
    """
    candidates = [t for t in (session_token, extract_bearer_token(authorization)) if t]
    if not candidates:
        raise AuthenticationError()

    for token in candidates:
        try:
            data = await auth_client.get_user(token)
        except InvalidTokenError:
            continue
        return AuthUser.from_supabase(data)

    logger.info("No presented token resolved to a user")
    raise AuthenticationError()
