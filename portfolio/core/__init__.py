"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CODEFORCES_API_BASE,
    CODEFORCES_HANDLE,
    FEEDS_ENABLED,
    LOG_JSON,
    LOG_LEVEL,
    REFRESH_INTERVAL_SECONDS,
    SUBMISSIONS_COUNT,
    UPSTREAM_TIMEOUT,
    UPSTREAM_USER_AGENT,
)
from .logging import get_logger, setup_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CODEFORCES_API_BASE",
    "CODEFORCES_HANDLE",
    "FEEDS_ENABLED",
    "LOG_JSON",
    "LOG_LEVEL",
    "REFRESH_INTERVAL_SECONDS",
    "SUBMISSIONS_COUNT",
    "UPSTREAM_TIMEOUT",
    "UPSTREAM_USER_AGENT",
    "get_logger",
    "setup_logging",
    "utcnow",
]
