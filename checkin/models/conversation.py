"""
Request/response models for client-submitted transcripts, forwarding, SMS and summaries.
"""
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field

from checkin.models.langflow import LangflowApiStatus
from checkin.models.webhook import TranscriptTurn


class ConversationSubmission(BaseModel):
    """Transcript buffered by the browser during a call."""
    transcript: list[TranscriptTurn] = Field(default_factory=list)


class ConversationSubmissionResponse(BaseModel):
    stored: bool
    conversation_id: Optional[str] = None
    langflow_api: LangflowApiStatus
    received_at: datetime


class StoredConversation(BaseModel):
    id: str
    user_id: str
    summary: str
    created_at: Optional[datetime] = None


class ForwardTranscriptRequest(BaseModel):
    conversation_id: Optional[str] = None
    transcript: Any = None
    analysis: Any = None
    metadata: Any = None


class ForwardTranscriptResponse(BaseModel):
    success: bool = True
    message: str = "Transcript forwarded successfully"
    conversation_id: Optional[str] = None
    server_response: Any = None


class SendSmsRequest(BaseModel):
    to: str = Field(..., min_length=1, description="Caregiver phone number in E.164 format")
    childName: Optional[str] = None
    summary: str


class SendSmsResponse(BaseModel):
    sent: bool
    sid: Optional[str] = None


class SummarizeRequest(BaseModel):
    transcript: str


class SummarizeResponse(BaseModel):
    summary: str
