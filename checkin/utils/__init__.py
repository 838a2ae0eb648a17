"""
Utility modules for shared functionality.
"""
from .event_log import BoundedEventLog
from .transcript_format import format_client_transcript, format_webhook_transcript

__all__ = [
    "BoundedEventLog",
    "format_client_transcript",
    "format_webhook_transcript",
]
