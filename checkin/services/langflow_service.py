"""
Langflow relay service.

Sends formatted transcripts to a Langflow flow and pulls the generated
message out of the response.
"""
import json
import logging
import random
import string
import time
from typing import Any, Optional

import httpx

from checkin.config import (
    LANGFLOW_API_URL,
    LANGFLOW_FLOW_ID,
    LANGFLOW_SERVER_ADDRESS,
    LANGFLOW_TIMEOUT_SECONDS,
)
from checkin.exceptions import ConfigurationError, UpstreamUnavailableError
from checkin.models.langflow import LangflowRunRequest, RelayResult
from checkin.services.langflow_extractor import extract_langflow_message, format_langflow_output

logger = logging.getLogger(__name__)

_SESSION_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase


def generate_session_id(conversation_id: str) -> str:
    """
    Build a unique Langflow session id so responses are never served from
    the flow's memory of an earlier run.

    Format: "<conversation_id>-<unix millis>-<9 random base36 chars>"
    """
    suffix = "".join(random.choices(_SESSION_SUFFIX_ALPHABET, k=9))
    return f"{conversation_id}-{int(time.time() * 1000)}-{suffix}"


class LangflowClient:
    """
    Client for running Langflow flows over HTTP.

    Args:
        api_url: Full run URL used by send_transcript
        server_address: Langflow base URL used by summarize
        flow_id: Flow used by summarize
        timeout: Seconds before an outbound call is abandoned
        transport: Optional httpx transport (tests inject a MockTransport)
    """

    def __init__(
        self,
        api_url: str = LANGFLOW_API_URL,
        server_address: str = LANGFLOW_SERVER_ADDRESS,
        flow_id: str = LANGFLOW_FLOW_ID,
        timeout: float = LANGFLOW_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.server_address = server_address.rstrip("/") if server_address else ""
        self.flow_id = flow_id
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_url)

    async def _post_run(self, url: str, payload: LangflowRunRequest) -> Any:
        """POST a run request and return the decoded JSON body."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                json=payload.model_dump(),
                headers={"Content-Type": "application/json"},
            )
        if not response.is_success:
            raise UpstreamUnavailableError(
                "langflow",
                f"API request failed with status: {response.status_code}",
                details={"status_code": response.status_code},
            )
        return response.json()

    async def send_transcript(self, transcript: str, conversation_id: str) -> RelayResult:
        """
        Send a transcript to the configured flow and extract its message.

        Failures are reported in the result; this method does not raise and
        does not retry.
        """
        if not self.api_url:
            error = ConfigurationError("LANGFLOW_API_URL").message
            logger.error(f"Failed to send transcript to Langflow API: {error}")
            return RelayResult(success=False, error=error)

        session_id = generate_session_id(conversation_id)
        payload = LangflowRunRequest(input_value=transcript, session_id=session_id)

        logger.info(
            f"Sending transcript to Langflow: conversation_id={conversation_id}, "
            f"session_id={session_id}, length={len(transcript)}"
        )
        logger.debug(f"Transcript preview: {transcript[:200]}")

        try:
            response_data = await self._post_run(self.api_url, payload)
        except httpx.TimeoutException as e:
            error = f"ProviderTimeout: no response from Langflow within {self.timeout:.0f}s"
            logger.error(f"Failed to send transcript to Langflow API: {error} ({e!r})")
            return RelayResult(success=False, error=error)
        except httpx.HTTPError as e:
            error = f"ProviderUnreachable: {e!r}"
            logger.error(f"Failed to send transcript to Langflow API: {error}")
            return RelayResult(success=False, error=error)
        except UpstreamUnavailableError as e:
            logger.error(f"Failed to send transcript to Langflow API: {e.message}")
            return RelayResult(success=False, error=e.message)
        except json.JSONDecodeError as e:
            error = f"Invalid JSON from Langflow API: {e}"
            logger.error(f"Failed to send transcript to Langflow API: {error}")
            return RelayResult(success=False, error=error)

        extracted = extract_langflow_message(response_data)
        if extracted is None:
            logger.info("Langflow responded but no message could be extracted")
            return RelayResult(success=True, response=response_data)

        formatted = format_langflow_output(extracted)
        logger.info(f"Extracted Langflow message ({len(formatted)} chars)")
        return RelayResult(success=True, response=response_data, extracted_message=formatted)

    async def summarize(self, transcript: str) -> str:
        """
        Run the summary flow on a plain transcript.

        Raises:
            ConfigurationError: Server address or flow id not set
            UpstreamUnavailableError: Langflow failed or returned no message
        """
        if not self.server_address:
            raise ConfigurationError("LANGFLOW_SERVER_ADDRESS")
        if not self.flow_id:
            raise ConfigurationError("LANGFLOW_FLOW_ID")

        url = f"{self.server_address}/api/v1/run/{self.flow_id}"
        payload = LangflowRunRequest(
            input_value=transcript,
            session_id=f"summarize_{int(time.time() * 1000)}",
        )

        try:
            result = await self._post_run(url, payload)
        except UpstreamUnavailableError as e:
            logger.error(f"LangFlow error: {e.message}")
            raise UpstreamUnavailableError("langflow", "Failed to summarize")
        except (httpx.HTTPError, json.JSONDecodeError) as e:
            logger.error(f"LangFlow error: {e!r}")
            raise UpstreamUnavailableError("langflow", "Failed to summarize")

        message = extract_langflow_message(result)
        if not message or not message.strip():
            logger.warning(f"Langflow run succeeded but no message found: {str(result)[:500]}")
            raise UpstreamUnavailableError("langflow", "No summary generated", status_code=500)

        return message.strip()
