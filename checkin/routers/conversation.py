"""
Client-submitted transcripts from the browser voice session.
"""
import logging
from datetime import datetime, timezone

import asyncpg
from fastapi import APIRouter, Depends, Query

from checkin.auth import AuthUser, get_current_user
from checkin.dependencies import get_conversation_repo, get_langflow_client
from checkin.exceptions import CheckinException
from checkin.models.conversation import (
    ConversationSubmission,
    ConversationSubmissionResponse,
    StoredConversation,
)
from checkin.models.langflow import LangflowApiStatus, RelayResult
from checkin.repositories import ConversationRepository
from checkin.services import LangflowClient
from checkin.utils import format_client_transcript

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Conversations"])


@router.post("/conversation", response_model=ConversationSubmissionResponse)
async def submit_conversation(
    payload: ConversationSubmission,
    user: AuthUser = Depends(get_current_user),
    repo: ConversationRepository = Depends(get_conversation_repo),
    langflow: LangflowClient = Depends(get_langflow_client),
):
    """
    Store the transcript the browser buffered during a call, then relay it
    to Langflow for a parent-readable summary.

    A failed relay is reported in langflow_api; it never fails the request.
    """
    summary_text = format_client_transcript(payload.transcript)
    logger.info(f"Conversation submitted by user {user.id}: {len(payload.transcript)} turns")

    try:
        stored = await repo.create(user.id, summary_text)
    except asyncpg.PostgresError as e:
        logger.error(f"Error saving conversation: {e}")
        raise CheckinException(f"Error saving conversation: {e}")

    if payload.transcript:
        result = await langflow.send_transcript(summary_text, stored.id)
    else:
        result = RelayResult(success=False, error="No transcript data available")

    if not result.success:
        logger.warning(f"Langflow relay failed for conversation {stored.id}: {result.error}")

    return ConversationSubmissionResponse(
        stored=True,
        conversation_id=stored.id,
        langflow_api=LangflowApiStatus.from_result(result),
        received_at=datetime.now(timezone.utc),
    )


@router.get("/conversations", response_model=list[StoredConversation])
async def list_conversations(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: AuthUser = Depends(get_current_user),
    repo: ConversationRepository = Depends(get_conversation_repo),
):
    """List the signed-in user's stored check-ins, newest first."""
    return await repo.list_for_user(user.id, limit=limit, offset=offset)
