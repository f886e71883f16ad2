"""Stale issue detector."""

from datetime import datetime
from typing import Sequence

from git_focus.detectors.base import (
    Candidate,
    DetectorContext,
    DetectorSpec,
    age_in_days,
)
from git_focus.models import ActivityItem


def detect_stale_issues(
    issues: Sequence[ActivityItem], now: datetime
) -> list[Candidate]:
    """Open issues the user filed that nobody has resolved. Signal: age in days."""
    candidates = []
    for issue in issues:
        if issue.state != "open":
            continue
        days = age_in_days(issue.created_at, now)
        if days is None:
            continue
        where = f" ({issue.repository_name})" if issue.repository_name else ""
        candidates.append(
            Candidate(
                rule="stale_issue",
                title=f"Follow up on issue: {issue.title}{where}",
                signal=days,
                link=issue.url,
            )
        )
    return candidates


def _detect(issues: Sequence[ActivityItem], context: DetectorContext) -> list[Candidate]:
    return detect_stale_issues(issues, context.now)


DETECTOR = DetectorSpec(
    name="stale_issue",
    source="issues",
    detector=_detect,
)
