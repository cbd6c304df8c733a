"""View models derived from Codeforces data."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from .codeforces import Profile


class AggregateStats(BaseModel):
    solved: int
    average_difficulty: int
    recent_activity: int
    total_attempts: int
    top_rating: int
    current_rating: int
    rank: str
    max_rank: str
    rank_color: str


class StatsView(BaseModel):
    profile: Profile
    stats: AggregateStats


class ColorBucket(BaseModel):
    name: str
    fill: str
    stroke: str


class GraphPoint(BaseModel):
    x: int
    y: int
    px: float
    py: float
    color: ColorBucket
    contest_id: int
    contest_name: str
    updated_at: int


class GridLine(BaseModel):
    py: float
    label: int


class RecentContest(BaseModel):
    contest_id: int
    contest_name: str
    rank: int
    old_rating: int
    new_rating: int
    delta: int
    updated_at: int
    color: ColorBucket


class RatingGraph(BaseModel):
    width: int
    height: int
    padding: int
    min_rating: int
    max_rating: int
    path: str
    points: List[GraphPoint]
    grid: List[GridLine]
    recent: List[RecentContest]
    contest_count: int


class RatingGraphView(BaseModel):
    empty: bool
    graph: Optional[RatingGraph] = None


class FeedStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class FeedSnapshot(BaseModel):
    handle: str
    status: FeedStatus = FeedStatus.IDLE
    refreshing: bool = False
    data: Optional[Any] = None
    error: Optional[str] = None
    last_updated: Optional[datetime] = None


__all__ = [
    "AggregateStats",
    "ColorBucket",
    "FeedSnapshot",
    "FeedStatus",
    "GraphPoint",
    "GridLine",
    "RatingGraph",
    "RatingGraphView",
    "RecentContest",
    "StatsView",
]
