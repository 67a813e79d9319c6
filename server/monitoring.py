"""Request logging for the documentation API."""

import time
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("server.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client = request.client.host if request.client else "unknown"
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.time() - start_time) * 1000
            logger.exception(
                "%s %s failed after %.0fms (%s)", request.method, request.url.path, duration_ms, client
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s -> %d (%.0fms, %s)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            client,
        )
        response.headers['X-Response-Time'] = f"{duration_ms / 1000:.3f}s"
        return response
