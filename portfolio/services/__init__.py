"""Service layer helpers."""

from .codeforces import (
    CodeforcesError,
    MalformedPayloadError,
    RelayFailed,
    Relayed,
    UpstreamHTTPError,
    UpstreamStatusError,
    build_upstream_url,
    relay,
    unwrap_result,
)
from .feeds import Feed, RatingHistoryFeed, StatsFeed, build_feeds
from .rating_graph import project, rating_bucket
from .stats import aggregate, rank_color

__all__ = [
    "CodeforcesError",
    "Feed",
    "MalformedPayloadError",
    "RatingHistoryFeed",
    "RelayFailed",
    "Relayed",
    "StatsFeed",
    "UpstreamHTTPError",
    "UpstreamStatusError",
    "aggregate",
    "build_feeds",
    "build_upstream_url",
    "project",
    "rank_color",
    "rating_bucket",
    "relay",
    "unwrap_result",
]
