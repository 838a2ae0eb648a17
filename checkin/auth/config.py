"""
Authentication configuration.

Centralizes Supabase Auth settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Supabase Configuration
# =============================================================================

# Supabase project URL (e.g., https://xxx.supabase.co)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")

# Supabase anonymous/public key (safe to expose in frontend)
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

# Supabase service role key (keep secret, for admin operations)
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# =============================================================================
# Session Configuration
# =============================================================================

# Cookie holding the browser's Supabase access token
ACCESS_TOKEN_COOKIE = os.environ.get("ACCESS_TOKEN_COOKIE", "sb-access-token")

# Timeout for calls to the Supabase Auth API (seconds)
AUTH_REQUEST_TIMEOUT = float(os.environ.get("AUTH_REQUEST_TIMEOUT", "10"))
