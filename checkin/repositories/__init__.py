"""
Repository layer for data access.
"""
from .conversation_repo import ConversationRepository

__all__ = [
    "ConversationRepository",
]
