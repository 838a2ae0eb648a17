"""
Health check router.
"""
from fastapi import APIRouter, Depends

from checkin.dependencies import get_event_log
from checkin.utils import BoundedEventLog

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(event_log: BoundedEventLog = Depends(get_event_log)):
    """Liveness check. The database is not probed; storage is optional."""
    return {
        "status": "healthy",
        "service": "voice-checkin-backend",
        "event_log_size": len(event_log),
        "event_log_capacity": event_log.capacity,
    }
