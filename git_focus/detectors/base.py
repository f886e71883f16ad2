"""
Shared detector types and context helpers.
"""

from datetime import datetime
from typing import Any, Callable, NamedTuple, Sequence

from git_focus.models import Profile

# Input slices a detector can subscribe to
SOURCES = ("repositories", "pull_requests", "issues", "events", "profile")


class Candidate(NamedTuple):
    """An unscored finding emitted by a detector."""

    rule: str  # key into the scoring table
    title: str
    signal: float  # raw severity (stars, days, ...)
    link: str | None = None


class DetectorContext(NamedTuple):
    """Context provided to detectors."""

    profile: Profile
    now: datetime


class DetectorSpec(NamedTuple):
    """A registered detector and the input slice it reads."""

    name: str
    source: str  # one of SOURCES
    detector: Callable[[Sequence[Any], DetectorContext], list[Candidate]]


def age_in_days(moment: datetime | None, now: datetime) -> float | None:
    """Days elapsed between ``moment`` and ``now`` (None if unknown)."""
    if moment is None:
        return None
    return (now - moment).total_seconds() / 86400
