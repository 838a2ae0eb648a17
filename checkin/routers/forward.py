"""
Transcript forwarding to a downstream server.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from checkin.dependencies import get_transcript_forwarder
from checkin.exceptions import CheckinException
from checkin.models.conversation import ForwardTranscriptRequest, ForwardTranscriptResponse
from checkin.services import TranscriptForwarder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forwarding"])


@router.post("/forward-transcript", response_model=ForwardTranscriptResponse)
async def forward_transcript(
    request: ForwardTranscriptRequest,
    forwarder: TranscriptForwarder = Depends(get_transcript_forwarder),
):
    """Forward a transcript with a forwarded_at timestamp to FORWARD_SERVER_URL."""
    try:
        server_response = await forwarder.forward(request)
    except CheckinException as e:
        logger.error(f"❌ Failed to forward transcript: {e.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": e.message})

    return ForwardTranscriptResponse(
        conversation_id=request.conversation_id,
        server_response=server_response,
    )
