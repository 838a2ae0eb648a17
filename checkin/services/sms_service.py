"""
SMS messaging service using Twilio REST API.

Sends the parent-facing check-in summary to a caregiver's phone.
"""
import asyncio
import logging
from functools import lru_cache
from typing import Optional

from twilio.rest import Client

from checkin.config import TWILIO_NUMBER, TWILIO_SID, TWILIO_TOKEN
from checkin.exceptions import ConfigurationError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_twilio_client() -> Client:
    """Get cached Twilio client instance."""
    if not TWILIO_SID or not TWILIO_TOKEN:
        raise ConfigurationError("TWILIO_SID", message="Twilio credentials not configured")
    return Client(TWILIO_SID, TWILIO_TOKEN)


def compose_sms_body(summary: str, child_name: Optional[str] = None) -> str:
    """Build the two-part SMS: a heading line, a blank line, then the summary."""
    heading = f"Report for {child_name}:" if child_name else "Check-up summary:"
    return "\n\n".join([heading, summary])


class SmsSender:
    """Sends summaries through a Twilio client."""

    def __init__(self, client: Optional[Client] = None, from_number: Optional[str] = TWILIO_NUMBER):
        self._client = client
        self.from_number = from_number

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_twilio_client()
        return self._client

    async def send_summary(self, to_phone: str, summary: str, child_name: Optional[str] = None) -> str:
        """
        Send a check-in summary by SMS.

        Args:
            to_phone: Caregiver phone number (E.164)
            summary: Summary text
            child_name: Optional name used in the heading

        Returns:
            The Twilio message SID

        Raises:
            ConfigurationError: Twilio credentials or sender number missing
            UpstreamUnavailableError: Twilio rejected the message
        """
        if not self.from_number:
            raise ConfigurationError("TWILIO_NUMBER")

        client = self.client
        body = compose_sms_body(summary, child_name)

        # Run the blocking Twilio call in a thread pool
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None,
                lambda: client.messages.create(
                    body=body,
                    from_=self.from_number,
                    to=to_phone,
                )
            )
        except Exception as e:
            logger.error(f"❌ Twilio error sending SMS to {to_phone}: {e}")
            raise UpstreamUnavailableError("twilio", str(e) or "Failed to send SMS", status_code=500)

        logger.info(f"📤 SMS sent to {to_phone}: SID={result.sid}")
        return result.sid
