"""CORS configuration for the documentation API."""

import logging
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def get_cors_config(allowed_origins: List[str]) -> dict:
    """Read-only API: GET for content, POST for the deploy trigger."""
    return {
        "allow_origins": allowed_origins,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Accept", "Content-Type", "Authorization"],
        "expose_headers": [
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
        "max_age": 600,
    }


def setup_cors(app: FastAPI, allowed_origins: List[str]) -> None:
    """Setup CORS middleware for FastAPI application."""
    app.add_middleware(CORSMiddleware, **get_cors_config(allowed_origins))
    logger.info(f"CORS configured with origins: {allowed_origins}")
