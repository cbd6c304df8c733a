"""Schema exports."""

from .codeforces import Attempt, Envelope, Problem, Profile, RatingChange
from .stats import (
    AggregateStats,
    ColorBucket,
    FeedSnapshot,
    FeedStatus,
    GraphPoint,
    GridLine,
    RatingGraph,
    RatingGraphView,
    RecentContest,
    StatsView,
)

__all__ = [
    "AggregateStats",
    "Attempt",
    "ColorBucket",
    "Envelope",
    "FeedSnapshot",
    "FeedStatus",
    "GraphPoint",
    "GridLine",
    "Problem",
    "Profile",
    "RatingChange",
    "RatingGraph",
    "RatingGraphView",
    "RecentContest",
    "StatsView",
]
