"""Codeforces proxy and derived-view endpoints."""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ...models import FeedSnapshot
from ...services.codeforces import (
    CACHE_CONTROL,
    RelayFailed,
    failure_envelope,
    get_http_client,
    is_valid_endpoint,
    relay,
)
from ...services.feeds import Feed

router = APIRouter(prefix="/api/codeforces", tags=["codeforces"])


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


@router.get("")
async def codeforces_proxy(
    endpoint: Optional[str] = None,
    handle: Optional[str] = None,
    count: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    """Relay a request to the Codeforces API and pass the JSON through."""

    if not endpoint or not handle:
        return _bad_request("Missing required parameters")
    if not is_valid_endpoint(endpoint):
        return _bad_request("Invalid endpoint parameter")

    limit: Optional[int] = None
    if count:
        try:
            limit = int(count)
        except ValueError:
            return _bad_request("Invalid count parameter")
        if limit <= 0:
            return _bad_request("Invalid count parameter")

    outcome = await relay(client, endpoint, handle, limit)
    if isinstance(outcome, RelayFailed):
        return JSONResponse(failure_envelope(outcome.message), status_code=500)
    return JSONResponse(outcome.payload, headers={"Cache-Control": CACHE_CONTROL})


def _feed(request: Request, name: str) -> Feed:
    feeds = getattr(request.app.state, "feeds", None) or {}
    feed = feeds.get(name)
    if feed is None:
        raise HTTPException(503, "Codeforces feeds are disabled")
    return feed


def stats_feed(request: Request) -> Feed:
    return _feed(request, "stats")


def rating_feed(request: Request) -> Feed:
    return _feed(request, "rating")


@router.get("/stats", response_model=FeedSnapshot)
def get_stats(feed: Feed = Depends(stats_feed)) -> FeedSnapshot:
    """Latest profile and submission statistics."""

    return feed.snapshot


@router.post("/stats/refresh", response_model=FeedSnapshot)
async def refresh_stats(feed: Feed = Depends(stats_feed)) -> FeedSnapshot:
    return await feed.refresh()


@router.get("/rating-graph", response_model=FeedSnapshot)
def get_rating_graph(feed: Feed = Depends(rating_feed)) -> FeedSnapshot:
    """Latest rating progression graph."""

    return feed.snapshot


@router.post("/rating-graph/refresh", response_model=FeedSnapshot)
async def refresh_rating_graph(feed: Feed = Depends(rating_feed)) -> FeedSnapshot:
    return await feed.refresh()


__all__ = ["router"]
