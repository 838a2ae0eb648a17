"""
Webhook endpoints for ElevenLabs post-call events.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from checkin.config import RECENT_CALLS_LIMIT, WEBHOOK_LOG_PREVIEW_CHARS
from checkin.dependencies import get_event_log, get_langflow_client, get_webhook_secret
from checkin.exceptions import MalformedInputError
from checkin.models.langflow import LangflowApiStatus, RelayResult
from checkin.models.webhook import ElevenLabsWebhookPayload
from checkin.services import LangflowClient, construct_webhook_event
from checkin.utils import BoundedEventLog, format_webhook_transcript

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])

SUPPORTED_TYPES = ["post_call_transcription"]

# ============================================================================
# Helper Functions
# ============================================================================

def _log_body_preview(body: bytes) -> None:
    preview = body.decode("utf-8", errors="replace")
    if len(preview) > WEBHOOK_LOG_PREVIEW_CHARS:
        preview = preview[:WEBHOOK_LOG_PREVIEW_CHARS] + "... [truncated]"
    logger.debug(f"[webhook] request body: {preview}")


def _format_event_time(event_timestamp: int) -> str:
    """Render an event timestamp for logs; out-of-range values are shown raw."""
    try:
        return datetime.fromtimestamp(event_timestamp, tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        return str(event_timestamp)


async def process_post_call_transcription(
    payload: ElevenLabsWebhookPayload,
    langflow: LangflowClient,
) -> RelayResult:
    """Format the call transcript and relay it to Langflow."""
    data = payload.data
    event_time = _format_event_time(payload.event_timestamp)
    logger.info(
        f"Post call transcription: agent_id={data.agent_id}, conversation_id={data.conversation_id}, "
        f"status={data.status}, event_time={event_time}"
    )

    if not data.transcript:
        logger.info(f"No transcript data available for conversation {data.conversation_id}")
        return RelayResult(success=False, error="No transcript data available")

    formatted = format_webhook_transcript(data.transcript)
    duration = (data.metadata or {}).get("call_duration_secs")
    logger.info(f"Transcript turns: {len(data.transcript)}, call duration: {duration}s")

    summary = (data.analysis or {}).get("transcript_summary")
    if summary:
        logger.info(f"Provider transcript summary: {summary}")

    result = await langflow.send_transcript(formatted, data.conversation_id)
    if result.success:
        logger.info(f"✅ Transcript relayed for {data.conversation_id} (message extracted: {result.extracted_message is not None})")
    else:
        logger.warning(f"❌ Transcript relay failed for {data.conversation_id}: {result.error}")
    return result


# ============================================================================
# Webhook Endpoints
# ============================================================================

@router.get("/webhook")
@router.get("/elevenlabs-webhook")
async def webhook_status(
    request: Request,
    event_log: BoundedEventLog = Depends(get_event_log),
    langflow: LangflowClient = Depends(get_langflow_client),
):
    """Report that the webhook is listening, with the most recent call events."""
    return {
        "status": "webhook listening",
        "recent_calls": event_log.recent(RECENT_CALLS_LIMIT),
        "langflow_integration": "enabled" if langflow.enabled else "disabled",
        "endpoint": request.url.path,
        "methods": ["GET", "POST"],
        "supported_types": SUPPORTED_TYPES,
    }


@router.post("/webhook")
@router.post("/elevenlabs-webhook")
async def elevenlabs_webhook(
    request: Request,
    event_log: BoundedEventLog = Depends(get_event_log),
    secret: Optional[str] = Depends(get_webhook_secret),
    langflow: LangflowClient = Depends(get_langflow_client),
):
    """
    Handle ElevenLabs post-call webhooks.

    1. Verifies the HMAC signature and timestamp (401 on failure)
    2. Records post_call_transcription events in the recent-calls log
    3. Relays the transcript to Langflow and returns the extracted message

    Other event types are acknowledged and ignored.
    """
    # Read raw body for signature validation
    body = await request.body()
    signature = request.headers.get("elevenlabs-signature")

    try:
        event = construct_webhook_event(body, signature, secret)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Signed webhook body is not JSON: {e}")
        raise MalformedInputError(f"Invalid payload: {e}")

    _log_body_preview(body)

    event_type = event.get("type") if isinstance(event, dict) else None
    if event_type != "post_call_transcription":
        logger.info(f"ElevenLabs webhook ignored: type={event_type}")
        return {"received": True}

    try:
        payload = ElevenLabsWebhookPayload.model_validate(event)
    except ValidationError as e:
        logger.error(f"Failed to parse webhook payload: {e}")
        raise MalformedInputError("Invalid payload", details={"errors": e.errors(include_url=False, include_context=False)})

    event_log.append(event)

    data = payload.data
    call_successful = (data.analysis or {}).get("call_successful")
    logger.info(
        f"📞 New call completed: conversation_id={data.conversation_id}, "
        f"transcript entries={len(data.transcript)}, call successful={call_successful}"
    )

    result = await process_post_call_transcription(payload, langflow)

    return {
        "received": True,
        "conversation_id": data.conversation_id,
        "status": "processed",
        "langflow_api": LangflowApiStatus.from_result(result).model_dump(),
        "received_at": datetime.now(timezone.utc).isoformat(),
    }
