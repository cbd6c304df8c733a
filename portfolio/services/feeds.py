"""
Periodically refreshed Codeforces views.

A feed owns one snapshot and the asyncio task that refreshes it. Both the
timer and manual refreshes go through `Feed.refresh`; results are applied
only if they are the newest request issued and the feed is still open.
"""

from __future__ import annotations

import abc
import asyncio
import contextlib
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx

from ..core import REFRESH_INTERVAL_SECONDS, SUBMISSIONS_COUNT, get_logger, utcnow
from ..models import (
    Attempt,
    FeedSnapshot,
    FeedStatus,
    Profile,
    RatingChange,
    RatingGraphView,
    StatsView,
)
from .codeforces import (
    RATING_ENDPOINT,
    MalformedPayloadError,
    parse_items,
    relay,
    unwrap_result,
)
from .rating_graph import project
from .stats import aggregate

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class Feed(abc.ABC):
    """Base class: subclasses implement `load` to produce the view model."""

    name = "feed"
    fallback_error = "Failed to fetch Codeforces data"

    def __init__(
        self,
        handle: str,
        client: httpx.AsyncClient,
        interval: float = REFRESH_INTERVAL_SECONDS,
        clock: Clock = utcnow,
    ):
        self.handle = handle
        self.interval = interval
        self._client = client
        self._clock = clock
        self._snapshot = FeedSnapshot(handle=handle)
        self._issued = 0
        self._applied = 0
        self._settled = FeedStatus.IDLE
        self._in_flight = 0
        self._closed = False
        self._task: Optional[asyncio.Task] = None

    @property
    def snapshot(self) -> FeedSnapshot:
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @abc.abstractmethod
    async def load(self) -> Any:
        raise NotImplementedError

    async def refresh(self) -> FeedSnapshot:
        """Fetch and recompute once; never raises for upstream failures."""

        self._issued += 1
        seq = self._issued
        self._in_flight += 1
        self._snapshot = self._snapshot.model_copy(
            update={"status": FeedStatus.LOADING, "refreshing": True}
        )

        try:
            data = await self.load()
        except Exception as exc:  # any fetch failure is shown, not raised
            message = str(exc) or self.fallback_error
            logger.warning(
                "Feed refresh failed",
                feed=self.name,
                handle=self.handle,
                seq=seq,
                error=message,
                error_type=type(exc).__name__,
            )
            update: Dict[str, Any] = {
                "status": FeedStatus.ERROR,
                "data": None,
                "error": message,
            }
        else:
            update = {
                "status": FeedStatus.READY,
                "data": data,
                "error": None,
                "last_updated": self._clock(),
            }
        finally:
            self._in_flight -= 1

        if self._closed:
            logger.debug("Discarding result for closed feed", feed=self.name, seq=seq)
            # Back to the last applied status; nothing else will land now.
            self._snapshot = self._snapshot.model_copy(
                update={"status": self._settled, "refreshing": self._in_flight > 0}
            )
            return self._snapshot
        if seq <= self._applied:
            logger.info(
                "Discarding stale feed result",
                feed=self.name,
                seq=seq,
                applied=self._applied,
            )
            self._snapshot = self._snapshot.model_copy(
                update={"refreshing": self._in_flight > 0}
            )
            return self._snapshot

        self._applied = seq
        self._settled = update["status"]
        # A newer request may still be out; it shows up as `refreshing`.
        update["refreshing"] = self._in_flight > 0
        self._snapshot = self._snapshot.model_copy(update=update)
        if self._snapshot.status == FeedStatus.READY:
            logger.info("Feed refreshed", feed=self.name, handle=self.handle, seq=seq)
        return self._snapshot

    async def _run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Refresh now and then every `interval` seconds until `stop`."""

        if self.running:
            return
        self._closed = False
        self._task = asyncio.create_task(self._run(), name=f"feed:{self.name}")
        logger.info(
            "Feed started", feed=self.name, handle=self.handle, interval_s=self.interval
        )

    async def stop(self) -> None:
        self._closed = True
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        # A refresh cancelled mid-load never reaches the snapshot update.
        self._snapshot = self._snapshot.model_copy(
            update={"status": self._settled, "refreshing": self._in_flight > 0}
        )
        logger.info("Feed stopped", feed=self.name, handle=self.handle)


class StatsFeed(Feed):
    """Profile plus submission statistics."""

    name = "stats"
    fallback_error = "Failed to fetch Codeforces data"

    def __init__(self, *args: Any, submissions_count: int = SUBMISSIONS_COUNT, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.submissions_count = submissions_count

    async def load(self) -> StatsView:
        info = await relay(self._client, "user.info", self.handle)
        profiles = parse_items(
            Profile,
            unwrap_result(info, operation="user info", fallback="Failed to fetch user data"),
            operation="user info",
        )
        if not profiles:
            raise MalformedPayloadError("Invalid user info data format", "user info")
        profile = profiles[0]

        status = await relay(self._client, "user.status", self.handle, self.submissions_count)
        attempts = parse_items(
            Attempt,
            unwrap_result(status, operation="submissions", fallback="Failed to fetch submissions"),
            operation="submissions",
        )

        return StatsView(profile=profile, stats=aggregate(attempts, profile, now=self._clock()))


class RatingHistoryFeed(Feed):
    """Rating progression graph and recent contests."""

    name = "rating"
    fallback_error = "Failed to fetch rating history"

    async def load(self) -> RatingGraphView:
        outcome = await relay(self._client, RATING_ENDPOINT, self.handle)
        changes = parse_items(
            RatingChange,
            unwrap_result(
                outcome,
                operation="rating history",
                fallback="Failed to fetch rating history",
            ),
            operation="rating history",
        )
        if not changes:
            return RatingGraphView(empty=True)
        return RatingGraphView(empty=False, graph=project(changes))


def build_feeds(
    handle: str,
    client: httpx.AsyncClient,
    interval: float = REFRESH_INTERVAL_SECONDS,
) -> Dict[str, Feed]:
    feeds = (
        StatsFeed(handle, client, interval=interval),
        RatingHistoryFeed(handle, client, interval=interval),
    )
    return {feed.name: feed for feed in feeds}


__all__ = ["Feed", "RatingHistoryFeed", "StatsFeed", "build_feeds"]
