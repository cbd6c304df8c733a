"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...core import CODEFORCES_API_BASE, CODEFORCES_HANDLE, REFRESH_INTERVAL_SECONDS

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness check."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config(request: Request) -> Dict[str, Any]:
    """Expose frontend configuration values."""

    feeds = getattr(request.app.state, "feeds", None) or {}
    return {
        "codeforces_handle": CODEFORCES_HANDLE,
        "codeforces_api_base": CODEFORCES_API_BASE,
        "refresh_interval_seconds": REFRESH_INTERVAL_SECONDS,
        "feeds": sorted(feeds),
    }


__all__ = ["router"]
