"""
Pydantic models for request/response validation.
"""
from .webhook import TranscriptTurn, ElevenLabsWebhookData, ElevenLabsWebhookPayload
from .langflow import LangflowRunRequest, RelayResult, LangflowApiStatus
from .conversation import (
    ConversationSubmission,
    ConversationSubmissionResponse,
    StoredConversation,
    ForwardTranscriptRequest,
    ForwardTranscriptResponse,
    SendSmsRequest,
    SendSmsResponse,
    SummarizeRequest,
    SummarizeResponse,
)

__all__ = [
    "TranscriptTurn",
    "ElevenLabsWebhookData",
    "ElevenLabsWebhookPayload",
    "LangflowRunRequest",
    "RelayResult",
    "LangflowApiStatus",
    "ConversationSubmission",
    "ConversationSubmissionResponse",
    "StoredConversation",
    "ForwardTranscriptRequest",
    "ForwardTranscriptResponse",
    "SendSmsRequest",
    "SendSmsResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]
