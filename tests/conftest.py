"""
Pytest fixtures for the check-in backend tests.

The app runs in-process through httpx.ASGITransport. Langflow, Supabase Auth
and the forwarding server are replaced with httpx.MockTransport stubs, and the
conversation repository with an in-memory fake.
"""
import json
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio

from app import create_app
from checkin.auth import SupabaseAuthClient, get_supabase_auth
from checkin.dependencies import (
    get_conversation_repo,
    get_langflow_client,
    get_transcript_forwarder,
    get_webhook_secret,
)
from checkin.models.conversation import StoredConversation
from checkin.services import LangflowClient, TranscriptForwarder, compute_signature
from checkin.utils import BoundedEventLog

WEBHOOK_SECRET = "wsec_test_secret"
LANGFLOW_URL = "http://langflow.test/api/v1/run/flow-123"
SUPABASE_URL = "http://supabase.test"
FORWARD_URL = "http://downstream.test/api/transcripts"
VALID_TOKEN = "valid-access-token"
USER_ID = "0b6f3c0e-8a4e-4c52-9a55-1f0c2d6a7e11"


def sign(body: bytes, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Build an ElevenLabs-Signature header for a body."""
    t = str(int(time.time()) if timestamp is None else timestamp)
    return f"t={t},{compute_signature(secret, t, body)}"


def make_webhook_event(conversation_id: str = "conv_abc123", turns: int = 3) -> dict:
    """A post_call_transcription event shaped like ElevenLabs sends it."""
    transcript = []
    for i in range(turns):
        role = "agent" if i % 2 == 0 else "user"
        transcript.append({
            "role": role,
            "message": f"{role} message {i}",
            "time_in_call_secs": i * 4,
            "tool_calls": None,
            "tool_results": None,
            "feedback": None,
            "conversation_turn_metrics": None,
        })
    return {
        "type": "post_call_transcription",
        "event_timestamp": int(time.time()),
        "data": {
            "agent_id": "agent_wobble",
            "conversation_id": conversation_id,
            "status": "done",
            "transcript": transcript,
            "metadata": {"start_time_unix_secs": int(time.time()) - 60, "call_duration_secs": 42, "cost": 120},
            "analysis": {
                "evaluation_criteria_results": {},
                "data_collection_results": {},
                "call_successful": "success",
                "transcript_summary": "The child said they feel fine.",
            },
        },
    }


class HttpStub:
    """Configurable MockTransport handler that records requests."""

    def __init__(self, status_code: int = 200, payload: Any = None, exc: Optional[Exception] = None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.payload, (bytes, str)):
            return httpx.Response(self.status_code, content=self.payload)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def supabase_handler(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") == f"Bearer {VALID_TOKEN}":
        return httpx.Response(200, json={"id": USER_ID, "email": "parent@example.com", "user_metadata": {}})
    return httpx.Response(401, json={"msg": "invalid JWT"})


class FakeConversationRepository:
    """In-memory stand-in for ConversationRepository."""

    def __init__(self):
        self.rows: list[StoredConversation] = []

    async def create(self, user_id: str, summary: str) -> StoredConversation:
        row = StoredConversation(
            id=str(uuid.uuid4()),
            user_id=user_id,
            summary=summary,
            created_at=datetime.now(timezone.utc),
        )
        self.rows.append(row)
        return row

    async def list_for_user(self, user_id: str, limit: int = 50, offset: int = 0) -> list[StoredConversation]:
        rows = [r for r in reversed(self.rows) if r.user_id == user_id]
        return rows[offset:offset + limit]


@pytest.fixture
def event_log() -> BoundedEventLog:
    return BoundedEventLog(capacity=50)


@pytest.fixture
def langflow_stub() -> HttpStub:
    return HttpStub(payload={"outputs": [{"artifacts": {"message": "**Hi** - there"}}]})


@pytest.fixture
def forward_stub() -> HttpStub:
    return HttpStub(payload={"id": "downstream-1"})


@pytest.fixture
def conversation_repo() -> FakeConversationRepository:
    return FakeConversationRepository()


@pytest.fixture
def app(event_log, langflow_stub, forward_stub, conversation_repo):
    """App with every external collaborator stubbed."""
    application = create_app(event_log=event_log)
    application.dependency_overrides[get_webhook_secret] = lambda: WEBHOOK_SECRET
    application.dependency_overrides[get_langflow_client] = lambda: LangflowClient(
        api_url=LANGFLOW_URL,
        server_address="http://langflow.test",
        flow_id="flow-123",
        transport=langflow_stub.transport,
    )
    application.dependency_overrides[get_supabase_auth] = lambda: SupabaseAuthClient(
        url=SUPABASE_URL,
        anon_key="anon",
        transport=httpx.MockTransport(supabase_handler),
    )
    application.dependency_overrides[get_conversation_repo] = lambda: conversation_repo
    application.dependency_overrides[get_transcript_forwarder] = lambda: TranscriptForwarder(
        url=FORWARD_URL,
        auth_token="forward-token",
        transport=forward_stub.transport,
    )
    return application


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client bound to the app in-process."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
