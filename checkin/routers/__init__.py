"""
API routers for endpoint organization.
"""
from .health import router as health_router
from .webhooks import router as webhooks_router
from .conversation import router as conversation_router
from .forward import router as forward_router
from .sms import router as sms_router
from .summarize import router as summarize_router

__all__ = [
    "health_router",
    "webhooks_router",
    "conversation_router",
    "forward_router",
    "sms_router",
    "summarize_router",
]
