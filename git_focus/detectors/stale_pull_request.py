"""Stale pull request detector."""

from datetime import datetime
from typing import Sequence

from git_focus.detectors.base import (
    Candidate,
    DetectorContext,
    DetectorSpec,
    age_in_days,
)
from git_focus.models import ActivityItem


def detect_stale_pull_requests(
    pull_requests: Sequence[ActivityItem], now: datetime
) -> list[Candidate]:
    """
    Flags open pull requests authored by the user that have been waiting for a
    long time. Either nudge the reviewers or close them.

    Signal: age of the pull request in days.
    """
    candidates = []
    for pr in pull_requests:
        if pr.state != "open":
            continue
        days = age_in_days(pr.created_at, now)
        if days is None:
            continue
        candidates.append(
            Candidate(
                rule="stale_pull_request",
                title=f"Stale PR: {pr.title}",
                signal=days,
                link=pr.url,
            )
        )
    return candidates


def _detect(
    pull_requests: Sequence[ActivityItem], context: DetectorContext
) -> list[Candidate]:
    return detect_stale_pull_requests(pull_requests, context.now)


DETECTOR = DetectorSpec(
    name="stale_pull_request",
    source="pull_requests",
    detector=_detect,
)
