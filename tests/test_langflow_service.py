"""
Tests for the Langflow relay client.
"""
import re

import httpx
import pytest

from checkin.exceptions import ConfigurationError, UpstreamUnavailableError
from checkin.services import LangflowClient, generate_session_id
from tests.conftest import LANGFLOW_URL, HttpStub


def _client(stub: HttpStub, **kwargs) -> LangflowClient:
    return LangflowClient(
        api_url=kwargs.pop("api_url", LANGFLOW_URL),
        server_address="http://langflow.test/",
        flow_id="flow-123",
        transport=stub.transport,
        **kwargs,
    )


def test_session_id_format():
    session_id = generate_session_id("conv_1")
    assert re.fullmatch(r"conv_1-\d{13}-[0-9a-z]{9}", session_id)
    assert generate_session_id("conv_1") != session_id


@pytest.mark.asyncio
async def test_send_transcript_posts_chat_payload_and_formats_message():
    stub = HttpStub(payload={"outputs": [{"artifacts": {"message": "**Hi** - there"}}]})
    result = await _client(stub).send_transcript("Agent: hello\n\nUser: hi", "conv_1")

    assert result.success is True
    assert result.extracted_message == "Hi • there"
    assert result.message_length == len("Hi • there")
    assert result.response == {"outputs": [{"artifacts": {"message": "**Hi** - there"}}]}

    request = stub.requests[0]
    assert str(request.url) == LANGFLOW_URL
    assert request.headers["Content-Type"] == "application/json"
    body = stub.last_json
    assert body["input_value"] == "Agent: hello\n\nUser: hi"
    assert body["output_type"] == "chat"
    assert body["input_type"] == "chat"
    assert body["session_id"].startswith("conv_1-")


@pytest.mark.asyncio
async def test_send_transcript_without_known_shape_is_still_success():
    stub = HttpStub(payload={"outputs": [{"something": "else"}]})
    result = await _client(stub).send_transcript("t", "conv_1")
    assert result.success is True
    assert result.extracted_message is None
    assert result.message_length == 0


@pytest.mark.asyncio
async def test_http_500_becomes_failed_result():
    stub = HttpStub(status_code=500, payload={"detail": "boom"})
    result = await _client(stub).send_transcript("t", "conv_1")
    assert result.success is False
    assert result.error == "API request failed with status: 500"


@pytest.mark.asyncio
async def test_network_error_becomes_failed_result():
    stub = HttpStub(exc=httpx.ConnectError("connection refused"))
    result = await _client(stub).send_transcript("t", "conv_1")
    assert result.success is False
    assert result.error.startswith("ProviderUnreachable")


@pytest.mark.asyncio
async def test_timeout_is_reported_separately():
    stub = HttpStub(exc=httpx.ReadTimeout("too slow"))
    result = await _client(stub).send_transcript("t", "conv_1")
    assert result.success is False
    assert result.error.startswith("ProviderTimeout")


@pytest.mark.asyncio
async def test_non_json_body_becomes_failed_result():
    stub = HttpStub(payload=b"<html>gateway</html>")
    result = await _client(stub).send_transcript("t", "conv_1")
    assert result.success is False
    assert "JSON" in result.error


@pytest.mark.asyncio
async def test_missing_url_is_reported_not_raised():
    stub = HttpStub()
    result = await _client(stub, api_url="").send_transcript("t", "conv_1")
    assert result.success is False
    assert result.error == "LANGFLOW_API_URL environment variable not configured"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_summarize_uses_flow_run_endpoint():
    stub = HttpStub(payload={"outputs": [{"outputs": [{"outputs": {"message": {"message": "  All good.  "}}}]}]})
    summary = await _client(stub).summarize("Child: I'm fine")

    assert summary == "All good."
    assert str(stub.requests[0].url) == "http://langflow.test/api/v1/run/flow-123"
    assert stub.last_json["session_id"].startswith("summarize_")


@pytest.mark.asyncio
async def test_summarize_raises_on_provider_error():
    stub = HttpStub(status_code=503)
    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await _client(stub).summarize("t")
    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Failed to summarize"


@pytest.mark.asyncio
async def test_summarize_raises_when_no_message():
    stub = HttpStub(payload={"outputs": []})
    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await _client(stub).summarize("t")
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "No summary generated"


@pytest.mark.asyncio
async def test_summarize_requires_flow_configuration():
    client = LangflowClient(api_url=LANGFLOW_URL, server_address="", flow_id="", transport=HttpStub().transport)
    with pytest.raises(ConfigurationError):
        await client.summarize("t")
