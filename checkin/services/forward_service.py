"""
Forwards finished call transcripts to a downstream server.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from checkin.config import FORWARD_SERVER_AUTH_TOKEN, FORWARD_SERVER_URL, LANGFLOW_TIMEOUT_SECONDS
from checkin.exceptions import ConfigurationError, UpstreamUnavailableError
from checkin.models.conversation import ForwardTranscriptRequest

logger = logging.getLogger(__name__)


class TranscriptForwarder:
    """POSTs transcript payloads to FORWARD_SERVER_URL."""

    def __init__(
        self,
        url: str = FORWARD_SERVER_URL,
        auth_token: str = FORWARD_SERVER_AUTH_TOKEN,
        timeout: float = LANGFLOW_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.auth_token = auth_token
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def forward(self, request: ForwardTranscriptRequest) -> Any:
        """
        Forward a transcript and return the downstream JSON response.

        A downstream body that isn't JSON is returned as an empty dict.

        Raises:
            ConfigurationError: No forwarding URL
            UpstreamUnavailableError: Network failure or non-2xx status
        """
        if not self.url:
            raise ConfigurationError("FORWARD_SERVER_URL")

        body = {
            "conversation_id": request.conversation_id,
            "transcript": request.transcript,
            "analysis": request.analysis,
            "metadata": request.metadata,
            "forwarded_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=body, headers=self._get_headers())
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError("forward", f"Failed to forward transcript: {e!r}", status_code=500)

        if not response.is_success:
            raise UpstreamUnavailableError(
                "forward",
                f"Failed to forward transcript: {response.status_code} {response.reason_phrase}",
                status_code=500,
            )

        try:
            server_response = response.json()
        except ValueError:
            server_response = {}

        logger.info(f"✅ Successfully forwarded transcript for conversation: {request.conversation_id}")
        return server_response
