"""Missing license detector."""

from typing import Sequence

from git_focus.detectors.base import Candidate, DetectorContext, DetectorSpec
from git_focus.models import RepositorySummary


def detect_missing_license(repositories: Sequence[RepositorySummary]) -> list[Candidate]:
    """
    Flags repositories that people use but cannot legally reuse.

    Without a license, nobody may copy, modify or redistribute the code, so
    every star on an unlicensed repository is a user who is exposed.

    Signal: star count. The scorer ignores repositories under the popularity
    threshold and saturates for very popular ones.
    """
    candidates = []
    for repo in repositories:
        if repo.fork or repo.license is not None:
            continue
        candidates.append(
            Candidate(
                rule="missing_license",
                title=f"Add a license to {repo.full_name}",
                signal=repo.stargazers_count,
                link=repo.html_url,
            )
        )
    return candidates


def _detect(
    repositories: Sequence[RepositorySummary], _context: DetectorContext
) -> list[Candidate]:
    return detect_missing_license(repositories)


DETECTOR = DetectorSpec(
    name="missing_license",
    source="repositories",
    detector=_detect,
)
