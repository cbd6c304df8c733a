"""FastAPI application factory and configuration."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    CODEFORCES_HANDLE,
    FEEDS_ENABLED,
    LOG_JSON,
    LOG_LEVEL,
    REFRESH_INTERVAL_SECONDS,
    get_logger,
    setup_logging,
)
from .services.codeforces import create_client
from .services.feeds import build_feeds

setup_logging(log_level=LOG_LEVEL, json_output=LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.feeds = {}
    if not app.state.feeds_enabled:
        logger.info("Application starting", feeds=[])
        yield
        return

    client = create_client()
    feeds = build_feeds(CODEFORCES_HANDLE, client, interval=REFRESH_INTERVAL_SECONDS)
    app.state.feeds = feeds
    for feed in feeds.values():
        feed.start()
    logger.info("Application starting", handle=CODEFORCES_HANDLE, feeds=sorted(feeds))

    try:
        yield
    finally:
        logger.info("Application shutting down")
        for feed in feeds.values():
            await feed.stop()
        await client.aclose()


def create_app(feeds_enabled: bool = FEEDS_ENABLED) -> FastAPI:
    app = FastAPI(title="Portfolio API", version="0.1.0", lifespan=lifespan)
    app.state.feeds_enabled = feeds_enabled
    app.state.feeds = {}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "HTTP request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("portfolio.app:app", host="127.0.0.1", port=3000, reload=True)
