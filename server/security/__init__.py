"""Security package for the documentation API."""

from .paths import is_safe_segment, is_within
from .rate_limiting import (
    create_limiter,
    redis_available,
    rate_limit_handler,
    setup_rate_limiting
)
from .cors import setup_cors, get_cors_config
from .auth import bearer_token, require_deployment_key

__all__ = [
    # Paths
    "is_safe_segment",
    "is_within",
    # Rate limiting
    "create_limiter",
    "redis_available",
    "rate_limit_handler",
    "setup_rate_limiting",
    # CORS
    "setup_cors",
    "get_cors_config",
    # Authentication
    "bearer_token",
    "require_deployment_key"
]
