"""
Database connection management.
"""
import asyncpg
import logging
from typing import Optional
from checkin.config import DATABASE_URL
from checkin.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Global connection pool
_db_pool: Optional[asyncpg.Pool] = None


async def get_db_pool() -> asyncpg.Pool:
    """Get or create the database connection pool.

    Pool configuration suits the Supabase Session Mode Pooler:
    - setup callback validates connections on acquire
    - max_inactive_connection_lifetime matches the pooler timeout (~5 min)
    """
    global _db_pool
    if _db_pool is None:
        if not DATABASE_URL:
            raise ConfigurationError("DATABASE_URL")

        # Convert SQLAlchemy URL to asyncpg format
        raw_url = DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")

        async def setup_connection(conn):
            """Validate connection on acquire."""
            await conn.execute("SELECT 1")

        _db_pool = await asyncpg.create_pool(
            raw_url,
            min_size=1,
            max_size=5,
            command_timeout=30,
            max_inactive_connection_lifetime=300.0,
            setup=setup_connection,
        )
        logger.info("Database connection pool created (min=1, max=5, idle_lifetime=300s)")
    return _db_pool


async def close_db_pool():
    """Close the database connection pool."""
    global _db_pool
    if _db_pool is not None:
        await _db_pool.close()
        _db_pool = None
        logger.info("Database connection pool closed")
