# config/cache.py
import logging
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


async def get_redis() -> Redis:
    """
    Shared client for document stores and the rate limiter.
    Documents are stored as JSON bytes, so responses are left undecoded.
    """
    global _client
    if _client is None:
        _client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=False,
            socket_keepalive=True,
            health_check_interval=30,
        )
        # Fail fast on startup if Redis is unreachable.
        await _client.ping()
        logger.info("redis.connected")
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("redis.closed")
