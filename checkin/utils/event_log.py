"""
In-memory log of recent webhook events.

Keeps the most recent post-call events for the status endpoint. The log is
per-process and lost on restart; durable data goes to the database.
"""
import logging
import threading
from collections import deque
from typing import Any

logger = logging.getLogger(__name__)


class BoundedEventLog:
    """
    Fixed-capacity log of webhook events in arrival order.

    Appending past capacity drops the oldest entries. Guarded by a lock so an
    instance stays consistent if it is ever shared across threads.
    """

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._events: deque[Any] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, event: Any) -> None:
        """Add an event to the tail, evicting from the head when full."""
        with self._lock:
            self._events.append(event)
            size = len(self._events)
        logger.debug(f"Event log append: size={size}/{self._capacity}")

    def recent(self, n: int = 10) -> list[Any]:
        """Return the last n events, oldest first."""
        if n <= 0:
            return []
        with self._lock:
            events = list(self._events)
        return events[-n:]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
