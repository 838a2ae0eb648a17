"""
Transcript formatting for the analysis provider and for storage.
"""
from typing import Iterable, Union

from checkin.config import (
    CLIENT_AGENT_LABEL,
    CLIENT_USER_LABEL,
    WEBHOOK_AGENT_LABEL,
    WEBHOOK_USER_LABEL,
)
from checkin.models.webhook import TranscriptTurn

TurnLike = Union[TranscriptTurn, dict]


def _role_and_message(turn: TurnLike) -> tuple[str, str]:
    if isinstance(turn, dict):
        return str(turn.get("role") or ""), str(turn.get("message") or "")
    return turn.role, turn.message or ""


def format_webhook_transcript(transcript: Iterable[TurnLike]) -> str:
    """
    Format a provider transcript as "Agent: ..." / "User: ..." paragraphs.

    Any role other than "agent" is labelled as the user.
    """
    lines = []
    for turn in transcript:
        role, message = _role_and_message(turn)
        speaker = WEBHOOK_AGENT_LABEL if role == "agent" else WEBHOOK_USER_LABEL
        lines.append(f"{speaker}: {message}")
    return "\n\n".join(lines)


def format_client_transcript(transcript: Iterable[TurnLike]) -> str:
    """
    Format a browser-buffered transcript as "Child: ..." / "Dr Wobble: ..." lines.

    Any role other than "user" is the voice agent.
    """
    lines = []
    for turn in transcript:
        role, message = _role_and_message(turn)
        speaker = CLIENT_USER_LABEL if role == "user" else CLIENT_AGENT_LABEL
        lines.append(f"{speaker}: {message}")
    return "\n".join(lines)
