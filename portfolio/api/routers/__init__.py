"""Aggregate API routers."""

from fastapi import APIRouter

from .codeforces import router as codeforces_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    codeforces_router,
)

__all__ = ["ALL_ROUTERS"]
