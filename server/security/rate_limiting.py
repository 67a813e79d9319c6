"""Rate limiting for the documentation API using slowapi, optionally backed by Redis."""

import logging
from typing import Optional

import redis
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def redis_available(redis_url: Optional[str]) -> bool:
    """True when ``redis_url`` points at a Redis server that answers a ping."""
    if not redis_url:
        return False
    try:
        with redis.from_url(redis_url) as client:
            client.ping()
        return True
    except redis.RedisError as e:
        logger.warning(f"Redis connection failed: {e}. Rate limiting will use in-memory storage.")
        return False


def create_limiter(storage_url: Optional[str] = None) -> Limiter:
    """Build a limiter keyed on the peer address, reporting X-RateLimit-* headers.

    Forwarded-for headers are client supplied and are never used as the key.
    """
    if redis_available(storage_url):
        logger.info("Rate limiting backed by Redis")
        return Limiter(key_func=get_remote_address, headers_enabled=True, storage_uri=storage_url)
    return Limiter(key_func=get_remote_address, headers_enabled=True)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Custom handler for rate limit exceeded responses."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    response = JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "detail": f"Rate limit exceeded: {exc.detail}",
        }
    )
    retry_after = getattr(exc, 'retry_after', None)
    response.headers["Retry-After"] = str(retry_after or 60)
    return response


def setup_rate_limiting(app: FastAPI, limiter: Limiter) -> None:
    """Attach ``limiter`` to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
