"""
Webhook payload models.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class TranscriptTurn(BaseModel):
    """One speaker-tagged utterance from a voice session."""
    model_config = ConfigDict(extra="allow")

    role: str  # "user", "agent" (webhook) or "ai" (browser buffer)
    message: Optional[str] = ""
    time_in_call_secs: Optional[float] = None


class ElevenLabsWebhookData(BaseModel):
    """Data object from ElevenLabs post-call webhook."""
    model_config = ConfigDict(extra="allow")

    agent_id: str
    conversation_id: str
    status: Optional[str] = None
    transcript: list[TranscriptTurn] = []
    metadata: Optional[dict[str, Any]] = None
    analysis: Optional[dict[str, Any]] = None


class ElevenLabsWebhookPayload(BaseModel):
    """Full payload from ElevenLabs post-call webhook."""
    model_config = ConfigDict(extra="allow")

    type: str  # "post_call_transcription", "post_call_audio", "call_initiation_failure"
    event_timestamp: int
    data: ElevenLabsWebhookData
