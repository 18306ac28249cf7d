# controller/limits.py
from fastapi import Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings


def rate_limited() -> list:
    """Router-level dependency list: one Redis-backed limiter per router."""
    return [
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]
