"""
ElevenLabs webhook signature verification.

Signature header format: t=timestamp,v0=hash
Hash is the hex sha256 HMAC of "timestamp.request_body" keyed with the
webhook secret.
"""
import hmac
import json
import logging
import time
from hashlib import sha256
from typing import Any, Optional

from checkin.auth.exceptions import (
    InvalidSignatureError,
    MalformedSignatureError,
    MissingSignatureError,
    SignatureExpiredError,
    WebhookSecretNotConfiguredError,
)
from checkin.config import WEBHOOK_TOLERANCE_SECONDS

logger = logging.getLogger(__name__)


def parse_signature_header(signature_header: str) -> tuple[str, str]:
    """
    Split a signature header into its timestamp and "v0=<hex>" parts.

    Raises:
        MalformedSignatureError: If either part is missing or empty
    """
    timestamp = None
    hmac_signature = None

    for part in signature_header.split(","):
        part = part.strip()
        if part.startswith("t=") and timestamp is None:
            timestamp = part[2:]
        elif part.startswith("v0=") and hmac_signature is None:
            hmac_signature = part

    if not timestamp or not hmac_signature or hmac_signature == "v0=":
        logger.warning(f"Invalid signature format: {signature_header}")
        raise MalformedSignatureError()

    return timestamp, hmac_signature


def compute_signature(secret: str, timestamp: str, request_body: bytes) -> str:
    """Return the expected "v0=<hex>" signature for a body."""
    payload_to_sign = f"{timestamp}.".encode("utf-8") + request_body
    mac = hmac.new(
        key=secret.encode("utf-8"),
        msg=payload_to_sign,
        digestmod=sha256,
    )
    return "v0=" + mac.hexdigest()


def construct_webhook_event(
    request_body: bytes,
    signature_header: Optional[str],
    secret: Optional[str],
    now: Optional[float] = None,
) -> Any:
    """
    Verify a webhook delivery and return its parsed JSON body.

    Args:
        request_body: The exact raw bytes of the request body
        signature_header: Value of the ElevenLabs-Signature header
        secret: Shared webhook secret
        now: Current unix time in seconds (defaults to time.time())

    Returns:
        The decoded event

    Raises:
        MissingSignatureError: No signature header
        MalformedSignatureError: t= or v0= can't be parsed
        SignatureExpiredError: Timestamp older than the tolerance window
        WebhookSecretNotConfiguredError: No secret configured
        InvalidSignatureError: HMAC mismatch
        json.JSONDecodeError: Body is not JSON despite a valid signature
        UnicodeDecodeError: Body is not valid UTF-8 despite a valid signature
    """
    if not signature_header:
        logger.warning("No elevenlabs-signature header provided")
        raise MissingSignatureError()

    timestamp, hmac_signature = parse_signature_header(signature_header)

    try:
        timestamp_ms = int(timestamp) * 1000
    except ValueError:
        logger.warning(f"Non-numeric signature timestamp: {timestamp!r}")
        raise MalformedSignatureError("Invalid signature timestamp")

    # Only stale timestamps are rejected; future-dated ones pass
    current = time.time() if now is None else now
    tolerance_ms = int(current * 1000) - WEBHOOK_TOLERANCE_SECONDS * 1000
    if timestamp_ms < tolerance_ms:
        logger.warning("Webhook timestamp too old")
        raise SignatureExpiredError()

    if not secret:
        logger.error("ELEVENLABS_WEBHOOK_SECRET not set, rejecting webhook")
        raise WebhookSecretNotConfiguredError()

    expected = compute_signature(secret, timestamp, request_body)
    if not hmac.compare_digest(hmac_signature.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("HMAC signature mismatch")
        raise InvalidSignatureError()

    return json.loads(request_body)
