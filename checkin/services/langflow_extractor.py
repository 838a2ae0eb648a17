"""
Message extraction from Langflow run responses.

Langflow's response shape differs between flow components and versions, so
the summary text is looked up along several known paths in a fixed priority
order. The first path that yields a non-empty string wins.
"""
import logging
import re
from typing import Any, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PathKey = Union[str, int]

# Paths relative to outputs[0], tried in this order
MESSAGE_PATHS: list[tuple[str, tuple[PathKey, ...]]] = [
    ("outputs[0].outputs[0].message.message", ("outputs", 0, "message", "message")),
    ("outputs[0].messages[0].message", ("messages", 0, "message")),
    ("outputs[0].outputs[0].results.message.text", ("outputs", 0, "results", "message", "text")),
    ("outputs[0].outputs[0].outputs.message.message", ("outputs", 0, "outputs", "message", "message")),
    ("outputs[0].artifacts.message", ("artifacts", "message")),
    ("outputs[0].outputs[0].artifacts.message", ("outputs", 0, "artifacts", "message")),
]

_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def lookup_path(value: Any, path: Sequence[PathKey]) -> Optional[Any]:
    """
    Follow a path of dict keys and list indexes.

    Returns None as soon as a step is missing or the container has the wrong
    type; never raises.
    """
    current = value
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
    return current


def match_path(first_output: Any, path: Sequence[PathKey]) -> Optional[str]:
    """Return the string at path if it is a non-empty str."""
    candidate = lookup_path(first_output, path)
    if isinstance(candidate, str) and candidate:
        return candidate
    return None


def extract_langflow_message(response: Any) -> Optional[str]:
    """
    Find the human-readable message in a Langflow response.

    Args:
        response: Decoded JSON of any shape

    Returns:
        The raw message, or None when no known shape matches
    """
    try:
        first_output = lookup_path(response, ("outputs", 0))
        if not isinstance(first_output, dict):
            logger.info("No first output found in Langflow response")
            return None

        for name, path in MESSAGE_PATHS:
            message = match_path(first_output, path)
            if message is not None:
                logger.info(f"Found Langflow message via {name}")
                return message

        logger.info(f"No message found in any expected path; first output keys: {list(first_output.keys())}")
        return None
    except Exception as e:
        logger.error(f"Error extracting message from Langflow response: {e}")
        return None


def format_langflow_output(message: str) -> str:
    """
    Make a Langflow message readable in the UI and in SMS.

    Removes **bold** markers, turns "- " bullets into "• " and trims.
    """
    cleaned = _BOLD_PATTERN.sub(r"\1", message)
    cleaned = cleaned.replace("- ", "• ")
    return cleaned.strip()
