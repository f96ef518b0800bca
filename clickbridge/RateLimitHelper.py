import logging
from fastapi import Request
import redis.exceptions

from clickbridge.services.security import extract_client_ip

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = "/api/click"


def is_admin_path(path: str) -> bool:
    return path.startswith(ADMIN_PATH_PREFIX)


def rate_limit_key(request: Request) -> str:
    return f"rate_limit:{extract_client_ip(request)}"


async def check_rate_limit(redis_client, key: str, limit: int, window: int):
    """Fixed window counter. Returns None when Redis is unavailable (fail open).

    INCR and EXPIRE go out in one MULTI/EXEC so a counter never outlives its
    window; NX keeps later hits from pushing the expiry back.
    """
    if redis_client is None:
        return None
    try:
        async with redis_client.pipeline(transaction=True) as pipe:
            pipe.incr(key, 1)
            pipe.expire(key, window, nx=True)
            current, _ = await pipe.execute()
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError):
        logger.warning("Redis connection failed. Rate limiting skipped (fail open).")
        return None
    except redis.exceptions.ResponseError as e:
        # EXPIRE NX needs Redis 7+
        logger.error(f"Redis rejected the rate limit pipeline: {e}. Rate limiting skipped (fail open).")
        return None

    return current <= limit
