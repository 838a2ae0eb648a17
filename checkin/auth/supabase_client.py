"""
Supabase Auth client wrapper.

Resolves browser access tokens to Supabase users.
"""
import logging
from typing import Any, Dict, Optional
import httpx

from checkin.auth.config import (
    SUPABASE_URL,
    SUPABASE_ANON_KEY,
    AUTH_REQUEST_TIMEOUT,
)
from checkin.auth.exceptions import InvalidTokenError
from checkin.exceptions import ConfigurationError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class SupabaseAuthClient:
    """
    Client for interacting with the Supabase Auth API.

    Only the token -> user lookup is needed here; sign-in and sign-up happen
    in the browser with the Supabase JS client.
    """

    def __init__(
        self,
        url: str = SUPABASE_URL,
        anon_key: str = SUPABASE_ANON_KEY,
        timeout: float = AUTH_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = f"{url.rstrip('/')}/auth/v1" if url else ""
        self.anon_key = anon_key
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self, access_token: str) -> Dict[str, str]:
        """Get headers for a request made on behalf of a user."""
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token}",
        }

    async def get_user(self, access_token: str) -> Dict[str, Any]:
        """
        Get the current user's data using their access token.

        Args:
            access_token: The user's access token

        Returns:
            User data from Supabase Auth (always contains "id")

        Raises:
            ConfigurationError: If SUPABASE_URL is not set
            InvalidTokenError: If Supabase does not accept the token
            UpstreamUnavailableError: If Supabase can't be reached
        """
        if not self.base_url:
            raise ConfigurationError("SUPABASE_URL")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/user",
                    headers=self._get_headers(access_token),
                )
        except httpx.HTTPError as e:
            logger.error(f"Supabase auth unreachable: {e}")
            raise UpstreamUnavailableError("supabase", f"Auth service unreachable: {e}")

        if response.status_code != 200:
            logger.warning(f"Get user failed ({response.status_code}): {response.text[:200]}")
            raise InvalidTokenError()

        user = response.json()
        if not isinstance(user, dict) or not user.get("id"):
            raise InvalidTokenError("Token did not resolve to a user")
        return user


# Singleton instance
supabase_auth = SupabaseAuthClient()
