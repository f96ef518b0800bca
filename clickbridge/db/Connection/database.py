import logging
import ssl
from typing import Optional

import redis.asyncio as aioredis
import redis.exceptions
from redis.asyncio.connection import ConnectionPool
from sqlalchemy.engine import URL, make_url

from clickbridge.core.config import Settings
from clickbridge.db.repository import (
    ClickStore,
    InMemoryClickStore,
    PostgresClickStore,
    SqliteClickStore,
)

logger = logging.getLogger(__name__)

# Environments that talk to Postgres without TLS
PLAINTEXT_DB_ENVIRONMENTS = ("development", "test")


def normalize_postgres_url(database_url: str) -> URL:
    """Point a Postgres URL at the asyncpg driver.

    Heroku/Dokku style ``postgres://`` and plain ``postgresql://`` URLs are
    both accepted. libpq's ``sslmode`` is dropped because asyncpg does not take
    it as a keyword; TLS is configured through connect args instead.
    """
    url = make_url(database_url)
    return url.set(drivername="postgresql+asyncpg").difference_update_query(["sslmode"])


def unverified_ssl_context() -> ssl.SSLContext:
    # Managed Postgres providers commonly present certificates we cannot verify
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def postgres_connect_args(settings: Settings) -> dict:
    if settings.APP_ENV in PLAINTEXT_DB_ENVIRONMENTS:
        return {}
    return {"ssl": unverified_ssl_context()}


def create_click_store(settings: Settings) -> ClickStore:
    if settings.DATABASE_URL:
        logger.info("Using PostgreSQL database")
        return PostgresClickStore(
            normalize_postgres_url(settings.DATABASE_URL),
            connect_args=postgres_connect_args(settings),
        )
    if settings.APP_ENV == "test":
        logger.info("Using in-memory database for testing")
        return InMemoryClickStore()
    logger.info(f"Using SQLite database ({settings.SQLITE_PATH})")
    return SqliteClickStore(settings.SQLITE_PATH)


def create_redis_client(settings: Settings) -> Optional[aioredis.Redis]:
    if not settings.REDIS_HOST:
        return None
    pool = ConnectionPool(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        decode_responses=True,
        max_connections=50,
        socket_connect_timeout=2,
        socket_keepalive=True,
        retry_on_timeout=True,
    )
    return aioredis.Redis(connection_pool=pool)


async def verify_redis_connection(redis_client) -> bool:
    try:
        await redis_client.ping()
        logger.info("Redis connection verified")
        return True
    except redis.exceptions.ConnectionError as e:
        logger.warning(f"Redis connection failed: {e}. Admin rate limiting will fail open.")
        return False
    except redis.exceptions.RedisError as e:
        logger.error(f"Unexpected Redis error: {e}")
        return False
