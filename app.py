import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
load_dotenv()  # Load .env file for local development

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from checkin.config import CORS_ORIGINS, ENVIRONMENT, EVENT_LOG_CAPACITY
from checkin.database import close_db_pool
from checkin.exceptions import register_exception_handlers
from checkin.routers import (
    conversation_router,
    forward_router,
    health_router,
    sms_router,
    summarize_router,
    webhooks_router,
)
from checkin.utils import BoundedEventLog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - release the database pool on shutdown."""
    logger.info(f"Voice check-in backend starting (environment={ENVIRONMENT})")
    yield
    await close_db_pool()


def create_app(event_log: Optional[BoundedEventLog] = None) -> FastAPI:
    """
    Build the FastAPI app.

    The app owns the recent-calls event log; pass one in to share or inspect it.
    """
    app = FastAPI(title="Voice Check-in Backend", version="0.1.0", lifespan=lifespan)
    app.state.event_log = event_log if event_log is not None else BoundedEventLog(EVENT_LOG_CAPACITY)

    # CORS middleware for the browser UI
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(webhooks_router)
    app.include_router(conversation_router)
    app.include_router(forward_router)
    app.include_router(sms_router)
    app.include_router(summarize_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
