"""
Conversation repository - stores check-in transcripts per user.
"""
import asyncpg
import uuid

from checkin.models.conversation import StoredConversation


def _row_to_conversation(row: asyncpg.Record) -> StoredConversation:
    return StoredConversation(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        summary=row["summary"],
        created_at=row["created_at"],
    )


class ConversationRepository:
    """Repository for the public.conversations table."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def create(self, user_id: str, summary: str) -> StoredConversation:
        """Insert a conversation transcript for a user."""
        row = await self.pool.fetchrow(
            """
            INSERT INTO public.conversations (user_id, summary)
            VALUES ($1, $2)
            RETURNING id, user_id, summary, created_at
            """,
            uuid.UUID(user_id),
            summary,
        )
        return _row_to_conversation(row)

    async def list_for_user(self, user_id: str, limit: int = 50, offset: int = 0) -> list[StoredConversation]:
        """List a user's conversations, newest first."""
        rows = await self.pool.fetch(
            """
            SELECT id, user_id, summary, created_at
            FROM public.conversations
            WHERE user_id = $1
            ORDER BY created_at DESC
            LIMIT $2 OFFSET $3
            """,
            uuid.UUID(user_id),
            limit,
            offset,
        )
        return [_row_to_conversation(row) for row in rows]
