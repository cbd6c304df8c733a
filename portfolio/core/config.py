"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Codeforces upstream --------------------------------------------------------
CODEFORCES_API_BASE = os.getenv(
    "CODEFORCES_API_BASE", "https://codeforces.com/api"
).rstrip("/")
CODEFORCES_HANDLE = os.getenv("CODEFORCES_HANDLE", "chinmaylk99")

UPSTREAM_TIMEOUT = _env_int("UPSTREAM_TIMEOUT", 20)
UPSTREAM_USER_AGENT = os.getenv(
    "UPSTREAM_USER_AGENT", "Mozilla/5.0 (compatible; Portfolio-Bot/1.0)"
)


# Refresh feeds --------------------------------------------------------------
REFRESH_INTERVAL_SECONDS = _env_int("REFRESH_INTERVAL_SECONDS", 300)
SUBMISSIONS_COUNT = _env_int("SUBMISSIONS_COUNT", 1000)
FEEDS_ENABLED = _env_bool("FEEDS_ENABLED", True)


# CORS -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Logging --------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = _env_bool("LOG_JSON", True)


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
]
