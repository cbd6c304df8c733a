"""Rating history projection onto a fixed SVG canvas."""

from __future__ import annotations

from typing import List, Tuple

from ..models import ColorBucket, GraphPoint, GridLine, RatingChange, RatingGraph, RecentContest

WIDTH = 800
HEIGHT = 400
PADDING = 40
RATING_MARGIN = 100
GRID_LINES = 5
RECENT_LIMIT = 5

# (threshold, name, fill, stroke), highest first.
_BUCKETS: Tuple[Tuple[int, str, str, str], ...] = (
    (3000, "legendary grandmaster", "#FF0000", "#CC0000"),
    (2600, "international grandmaster", "#FF8C00", "#CC7000"),
    (2400, "grandmaster", "#FFA500", "#CC8400"),
    (2200, "master", "#FFD700", "#CCAD00"),
    (1900, "candidate master", "#9370DB", "#7659B0"),
    (1600, "expert", "#0000FF", "#0000CC"),
    (1400, "specialist", "#00CED1", "#00A5A7"),
    (1200, "pupil", "#008000", "#006600"),
)
_NEUTRAL = ColorBucket(name="newbie", fill="#808080", stroke="#666666")


def rating_bucket(rating: int) -> ColorBucket:
    """Pick the colour bucket of the largest threshold the rating reaches."""

    for threshold, name, fill, stroke in _BUCKETS:
        if rating >= threshold:
            return ColorBucket(name=name, fill=fill, stroke=stroke)
    return _NEUTRAL


def _fmt(value: float) -> str:
    return f"{value:g}"


def project(changes: List[RatingChange]) -> RatingGraph:
    """
    Project a chronologically ordered rating history onto the canvas.

    The caller handles the empty history; an empty list raises ValueError.
    """

    if not changes:
        raise ValueError("rating history is empty")

    graph_width = WIDTH - 2 * PADDING
    graph_height = HEIGHT - 2 * PADDING

    ratings = [change.newRating for change in changes]
    min_rating = min(ratings) - RATING_MARGIN
    max_rating = max(ratings) + RATING_MARGIN
    rating_range = max_rating - min_rating

    count = len(changes)
    points: List[GraphPoint] = []
    for index, change in enumerate(changes):
        if count == 1:
            px = WIDTH / 2
        else:
            px = PADDING + (index / (count - 1)) * graph_width
        py = PADDING + graph_height - ((change.newRating - min_rating) / rating_range) * graph_height
        points.append(
            GraphPoint(
                x=index,
                y=change.newRating,
                px=px,
                py=py,
                color=rating_bucket(change.newRating),
                contest_id=change.contestId,
                contest_name=change.contestName,
                updated_at=change.ratingUpdateTimeSeconds,
            )
        )

    path = "M " + " L ".join(f"{_fmt(p.px)},{_fmt(p.py)}" for p in points)

    grid = [
        GridLine(
            py=PADDING + (i / (GRID_LINES - 1)) * graph_height,
            label=round(max_rating - (i / (GRID_LINES - 1)) * rating_range),
        )
        for i in range(GRID_LINES)
    ]

    recent = [
        RecentContest(
            contest_id=change.contestId,
            contest_name=change.contestName,
            rank=change.rank,
            old_rating=change.oldRating,
            new_rating=change.newRating,
            delta=change.delta,
            updated_at=change.ratingUpdateTimeSeconds,
            color=rating_bucket(change.newRating),
        )
        for change in reversed(changes[-RECENT_LIMIT:])
    ]

    return RatingGraph(
        width=WIDTH,
        height=HEIGHT,
        padding=PADDING,
        min_rating=min_rating,
        max_rating=max_rating,
        path=path,
        points=points,
        grid=grid,
        recent=recent,
        contest_count=count,
    )


__all__ = ["HEIGHT", "PADDING", "WIDTH", "project", "rating_bucket"]
