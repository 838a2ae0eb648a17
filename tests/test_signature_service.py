"""
Tests for ElevenLabs webhook signature verification.
"""
import hashlib
import hmac
import json

import pytest

from checkin.auth import (
    InvalidSignatureError,
    MalformedSignatureError,
    MissingSignatureError,
    SignatureExpiredError,
    WebhookSecretNotConfiguredError,
)
from checkin.services import compute_signature, construct_webhook_event, parse_signature_header
from tests.conftest import WEBHOOK_SECRET, make_webhook_event, sign

NOW = 1_760_000_000


def _body() -> bytes:
    return json.dumps(make_webhook_event()).encode("utf-8")


def test_valid_signature_returns_parsed_event():
    body = _body()
    event = construct_webhook_event(body, sign(body, timestamp=NOW), WEBHOOK_SECRET, now=NOW)
    assert event["type"] == "post_call_transcription"
    assert event["data"]["conversation_id"] == "conv_abc123"


def test_signature_is_hmac_of_timestamp_dot_body():
    body = b'{"hello": "world"}'
    expected = hmac.new(WEBHOOK_SECRET.encode(), f"{NOW}.".encode() + body, hashlib.sha256).hexdigest()
    assert compute_signature(WEBHOOK_SECRET, str(NOW), body) == f"v0={expected}"


def test_single_byte_mutation_is_rejected():
    body = _body()
    header = sign(body, timestamp=NOW)
    mutated = bytearray(body)
    mutated[10] ^= 0x01
    with pytest.raises(InvalidSignatureError):
        construct_webhook_event(bytes(mutated), header, WEBHOOK_SECRET, now=NOW)


def test_wrong_secret_is_rejected():
    body = _body()
    with pytest.raises(InvalidSignatureError):
        construct_webhook_event(body, sign(body, secret="other", timestamp=NOW), WEBHOOK_SECRET, now=NOW)


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    with pytest.raises(MissingSignatureError):
        construct_webhook_event(_body(), header, WEBHOOK_SECRET, now=NOW)


@pytest.mark.parametrize("header", [
    "v0=abc",
    f"t={NOW}",
    "t=,v0=abc",
    f"t={NOW},v0=",
    "garbage",
])
def test_malformed_header(header):
    with pytest.raises(MalformedSignatureError):
        construct_webhook_event(_body(), header, WEBHOOK_SECRET, now=NOW)


def test_non_numeric_timestamp_is_malformed():
    with pytest.raises(MalformedSignatureError):
        construct_webhook_event(_body(), "t=yesterday,v0=abc", WEBHOOK_SECRET, now=NOW)


def test_timestamp_older_than_30_minutes_is_expired_even_with_valid_hash():
    body = _body()
    stale = NOW - 30 * 60 - 1
    with pytest.raises(SignatureExpiredError):
        construct_webhook_event(body, sign(body, timestamp=stale), WEBHOOK_SECRET, now=NOW)


def test_timestamp_exactly_at_tolerance_is_accepted():
    body = _body()
    edge = NOW - 30 * 60
    assert construct_webhook_event(body, sign(body, timestamp=edge), WEBHOOK_SECRET, now=NOW)


def test_future_timestamp_is_accepted():
    body = _body()
    future = NOW + 3600
    assert construct_webhook_event(body, sign(body, timestamp=future), WEBHOOK_SECRET, now=NOW)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_a_configuration_error(secret):
    body = _body()
    with pytest.raises(WebhookSecretNotConfiguredError) as exc_info:
        construct_webhook_event(body, sign(body, timestamp=NOW), secret, now=NOW)
    assert exc_info.value.status_code == 500


def test_expiry_is_checked_before_secret():
    body = _body()
    with pytest.raises(SignatureExpiredError):
        construct_webhook_event(body, sign(body, timestamp=NOW - 7200), None, now=NOW)


def test_invalid_json_after_valid_signature_propagates():
    body = b"not json at all"
    with pytest.raises(json.JSONDecodeError):
        construct_webhook_event(body, sign(body, timestamp=NOW), WEBHOOK_SECRET, now=NOW)


def test_parse_header_ignores_whitespace_and_order():
    timestamp, signature = parse_signature_header(f"v0=deadbeef, t={NOW}")
    assert timestamp == str(NOW)
    assert signature == "v0=deadbeef"


def test_non_utf8_body_after_valid_signature_propagates():
    body = b'{"type": "\xff\xfe"}'
    with pytest.raises(UnicodeDecodeError):
        construct_webhook_event(body, sign(body, timestamp=NOW), WEBHOOK_SECRET, now=NOW)
