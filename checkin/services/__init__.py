"""
Service layer for signature checks, Langflow relay, forwarding and SMS.
"""
from .signature_service import construct_webhook_event, compute_signature, parse_signature_header
from .langflow_extractor import extract_langflow_message, format_langflow_output, lookup_path
from .langflow_service import LangflowClient, generate_session_id
from .forward_service import TranscriptForwarder
from .sms_service import SmsSender, compose_sms_body

__all__ = [
    "construct_webhook_event",
    "compute_signature",
    "parse_signature_header",
    "extract_langflow_message",
    "format_langflow_output",
    "lookup_path",
    "LangflowClient",
    "generate_session_id",
    "TranscriptForwarder",
    "SmsSender",
    "compose_sms_body",
]
