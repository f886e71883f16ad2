"""Stale repository detector."""

from datetime import datetime
from typing import Sequence

from git_focus.detectors.base import (
    Candidate,
    DetectorContext,
    DetectorSpec,
    age_in_days,
)
from git_focus.models import RepositorySummary
from git_focus.scoring import STALE_REPOSITORY_MIN_STARS


def detect_stale_repositories(
    repositories: Sequence[RepositorySummary], now: datetime
) -> list[Candidate]:
    """
    Flags starred repositories that have not been pushed to in a long time.

    Repositories nobody starred are skipped: they carry too little signal for
    their inactivity to matter to anyone.

    Signal: days since the last push.
    """
    candidates = []
    for repo in repositories:
        if repo.fork or repo.stargazers_count < STALE_REPOSITORY_MIN_STARS:
            continue
        days = age_in_days(repo.pushed_at, now)
        if days is None or days <= 0:
            continue
        months = int(days // 30)
        candidates.append(
            Candidate(
                rule="stale_repository",
                title=f"{repo.full_name} has had no pushes in {months} months",
                signal=days,
                link=repo.html_url,
            )
        )
    return candidates


def _detect(
    repositories: Sequence[RepositorySummary], context: DetectorContext
) -> list[Candidate]:
    return detect_stale_repositories(repositories, context.now)


DETECTOR = DetectorSpec(
    name="stale_repository",
    source="repositories",
    detector=_detect,
)
