"""Shared-secret authentication for deployment routes."""

import hmac
import logging
from typing import Optional

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2:
        return None
    return parts[1]


def require_deployment_key(request: Request) -> None:
    """FastAPI dependency rejecting requests without the deployment key."""
    expected = request.app.state.settings.deployment_key
    token = bearer_token(request.headers.get("Authorization"))
    # No configured key means the route is closed
    if not expected or not token or not hmac.compare_digest(token, expected):
        logger.warning(f"Rejected deployment request from {request.client.host if request.client else 'unknown'}")
        raise HTTPException(status_code=401, detail="Unauthorized")
