"""
Configuration module for the voice check-in backend.
Centralizes environment variables, logging setup, and constants.
"""
import os
import logging
from dotenv import load_dotenv

# Load .env file for local development
load_dotenv()

# ============================================================================
# Environment Configuration
# ============================================================================

# Environment identifier (production, staging, development, etc.)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

# Comma-separated list of browser origins allowed to call the API
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

# ============================================================================
# Database Configuration
# ============================================================================

# Supabase Postgres connection string. Only required by endpoints that store data.
DATABASE_URL = os.environ.get("DATABASE_URL", "")

# ============================================================================
# External Service Configuration
# ============================================================================

# ElevenLabs Configuration
ELEVENLABS_WEBHOOK_SECRET = os.environ.get("ELEVENLABS_WEBHOOK_SECRET", "")

# Langflow Configuration
LANGFLOW_API_URL = os.environ.get("LANGFLOW_API_URL", "")  # full run URL used by the transcript relay
LANGFLOW_SERVER_ADDRESS = os.environ.get("LANGFLOW_SERVER_ADDRESS", "")  # e.g. "http://localhost:7860"
LANGFLOW_FLOW_ID = os.environ.get("LANGFLOW_FLOW_ID", "")
LANGFLOW_TIMEOUT_SECONDS = float(os.environ.get("LANGFLOW_TIMEOUT_SECONDS", "30"))

# Transcript forwarding
FORWARD_SERVER_URL = os.environ.get("FORWARD_SERVER_URL", "https://your-server.com/api/transcripts")
FORWARD_SERVER_AUTH_TOKEN = os.environ.get("FORWARD_SERVER_AUTH_TOKEN", "")

# Twilio Configuration
TWILIO_SID = os.environ.get("TWILIO_SID")
TWILIO_TOKEN = os.environ.get("TWILIO_TOKEN")
TWILIO_NUMBER = os.environ.get("TWILIO_NUMBER")  # e.g., "+14155238886"

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================================================
# Application Constants
# ============================================================================

# Recent webhook events kept in memory per process
EVENT_LOG_CAPACITY = int(os.environ.get("EVENT_LOG_CAPACITY", "50"))

# Number of events returned by GET /webhook
RECENT_CALLS_LIMIT = 10

# Webhook timestamps older than this are rejected
WEBHOOK_TOLERANCE_SECONDS = 30 * 60

# Webhook bodies are logged up to this many characters
WEBHOOK_LOG_PREVIEW_CHARS = 2000

# Speaker labels used when formatting transcripts
CLIENT_USER_LABEL = "Child"
CLIENT_AGENT_LABEL = "Dr Wobble"
WEBHOOK_USER_LABEL = "User"
WEBHOOK_AGENT_LABEL = "Agent"
