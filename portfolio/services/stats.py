"""Submission statistics."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Set, Tuple

from ..core import utcnow
from ..models import AggregateStats, Attempt, Profile

RECENT_WINDOW = timedelta(days=30)

# Checked in order: "candidate master" and "international grandmaster" also
# contain "master". The site's old client checked "master" before "candidate"
# and showed candidate masters in yellow; they are purple here on purpose.
_RANK_COLORS: Tuple[Tuple[str, str], ...] = (
    ("legendary", "red"),
    ("international", "orange"),
    ("candidate", "purple"),
    ("master", "yellow"),
    ("expert", "blue"),
    ("specialist", "cyan"),
    ("pupil", "green"),
)


def rank_color(rank: str) -> str:
    """Map a rank label such as "candidate master" to its colour name."""

    label = (rank or "").lower()
    for needle, color in _RANK_COLORS:
        if needle in label:
            return color
    return "gray"


def solved_difficulties(attempts: Iterable[Attempt]) -> Tuple[int, List[int]]:
    """
    Return the distinct solved count and the difficulty of each solved problem.

    The first accepted attempt on a problem decides its difficulty; later
    accepted attempts on the same (contest, index) pair are ignored.
    """

    seen: Set[Tuple[Optional[int], str]] = set()
    ratings: List[int] = []
    for attempt in attempts:
        if not attempt.is_success:
            continue
        key = attempt.problem_key
        if key in seen:
            continue
        seen.add(key)
        if attempt.problem.rating:
            ratings.append(attempt.problem.rating)
    return len(seen), ratings


def mean_difficulty(ratings: List[int]) -> int:
    if not ratings:
        return 0
    # Half rounds up, like Math.round on the frontend.
    return int(math.floor(sum(ratings) / len(ratings) + 0.5))


def recent_activity(
    attempts: Iterable[Attempt],
    now: Optional[datetime] = None,
    window: timedelta = RECENT_WINDOW,
) -> int:
    """Count attempts of any verdict created inside the trailing window."""

    now = now or utcnow()
    end = now.timestamp()
    start = (now - window).timestamp()
    return sum(1 for attempt in attempts if start < attempt.creationTimeSeconds <= end)


def aggregate(
    attempts: List[Attempt],
    profile: Profile,
    now: Optional[datetime] = None,
    window: timedelta = RECENT_WINDOW,
) -> AggregateStats:
    solved, ratings = solved_difficulties(attempts)
    return AggregateStats(
        solved=solved,
        average_difficulty=mean_difficulty(ratings),
        recent_activity=recent_activity(attempts, now, window),
        total_attempts=len(attempts),
        top_rating=profile.maxRating,
        current_rating=profile.rating,
        rank=profile.rank,
        max_rank=profile.maxRank,
        rank_color=rank_color(profile.rank),
    )


__all__ = [
    "RECENT_WINDOW",
    "aggregate",
    "mean_difficulty",
    "rank_color",
    "recent_activity",
    "solved_difficulties",
]
