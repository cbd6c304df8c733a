"""Schemas for the Codeforces API payloads consumed by the site."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    """Top-level wrapper every Codeforces API response comes in."""

    model_config = ConfigDict(extra="ignore")

    status: str
    comment: Optional[str] = None
    result: Any = None


class Profile(BaseModel):
    """A `user.info` entry."""

    model_config = ConfigDict(extra="ignore")

    handle: str
    # Unrated accounts come back without rating/rank fields.
    rating: int = 0
    maxRating: int = 0
    rank: str = "unrated"
    maxRank: str = "unrated"
    registrationTimeSeconds: int
    contribution: Optional[int] = None
    friendOfCount: Optional[int] = None
    avatar: Optional[str] = None
    titlePhoto: Optional[str] = None
    lastOnlineTimeSeconds: Optional[int] = None


class Problem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    contestId: Optional[int] = None
    index: str
    name: Optional[str] = None
    rating: Optional[int] = None
    tags: List[str] = []


class Attempt(BaseModel):
    """A `user.status` submission record."""

    model_config = ConfigDict(extra="ignore")

    id: int
    contestId: Optional[int] = None
    creationTimeSeconds: int
    problem: Problem
    # Submissions still in the judging queue carry no verdict.
    verdict: Optional[str] = None
    programmingLanguage: Optional[str] = None

    @property
    def problem_key(self) -> Tuple[Optional[int], str]:
        return (self.problem.contestId, self.problem.index)

    @property
    def is_success(self) -> bool:
        return self.verdict == "OK"


class RatingChange(BaseModel):
    """A `user.rating` entry."""

    model_config = ConfigDict(extra="ignore")

    contestId: int
    contestName: str
    rank: int
    oldRating: int
    newRating: int
    ratingUpdateTimeSeconds: int

    @property
    def delta(self) -> int:
        return self.newRating - self.oldRating


__all__ = ["Attempt", "Envelope", "Problem", "Profile", "RatingChange"]
