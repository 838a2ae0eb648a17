"""
FastAPI dependency injection factories.

This module provides dependency factories for repositories, services,
and other shared resources used across routers. Tests replace any of them
through app.dependency_overrides.
"""
from typing import Optional

import asyncpg
from fastapi import Depends, Request

from checkin.config import ELEVENLABS_WEBHOOK_SECRET
from checkin.database import get_db_pool
from checkin.repositories import ConversationRepository
from checkin.services import LangflowClient, SmsSender, TranscriptForwarder
from checkin.utils import BoundedEventLog


# =============================================================================
# Application State
# =============================================================================

def get_event_log(request: Request) -> BoundedEventLog:
    """Get the event log owned by the running app."""
    return request.app.state.event_log


def get_webhook_secret() -> Optional[str]:
    """Get the shared ElevenLabs webhook secret."""
    return ELEVENLABS_WEBHOOK_SECRET


# =============================================================================
# Database Dependencies
# =============================================================================

async def get_pool() -> asyncpg.Pool:
    """Get the database connection pool."""
    return await get_db_pool()


async def get_conversation_repo(
    pool: asyncpg.Pool = Depends(get_pool)
) -> ConversationRepository:
    """Get a ConversationRepository instance."""
    return ConversationRepository(pool)


# =============================================================================
# Service Dependencies
# =============================================================================

def get_langflow_client() -> LangflowClient:
    """Get a LangflowClient configured from the environment."""
    return LangflowClient()


def get_transcript_forwarder() -> TranscriptForwarder:
    """Get a TranscriptForwarder configured from the environment."""
    return TranscriptForwarder()


def get_sms_sender() -> SmsSender:
    """Get an SmsSender backed by the shared Twilio client."""
    return SmsSender()
