"""Contribution gap detector."""

from datetime import datetime
from typing import Sequence

from git_focus.detectors.base import (
    Candidate,
    DetectorContext,
    DetectorSpec,
    age_in_days,
)
from git_focus.models import UserEvent


def detect_contribution_gap(
    events: Sequence[UserEvent], login: str, now: datetime
) -> list[Candidate]:
    """
    Flags an account whose public activity feed has gone quiet.

    An empty feed says nothing about recency (GitHub only keeps recent events),
    so it produces no finding.

    Signal: days since the latest public event.
    """
    dates = [event.created_at for event in events if event.created_at is not None]
    if not dates:
        return []
    days = age_in_days(max(dates), now)
    if days is None or days <= 0:
        return []
    return [
        Candidate(
            rule="contribution_gap",
            title=f"No public activity in {int(days)} days",
            signal=days,
            link=f"https://github.com/{login}",
        )
    ]


def _detect(events: Sequence[UserEvent], context: DetectorContext) -> list[Candidate]:
    return detect_contribution_gap(events, context.profile.login, context.now)


DETECTOR = DetectorSpec(
    name="contribution_gap",
    source="events",
    detector=_detect,
)
