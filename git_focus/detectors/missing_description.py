"""Missing description detector."""

from typing import Sequence

from git_focus.detectors.base import Candidate, DetectorContext, DetectorSpec
from git_focus.models import RepositorySummary


def detect_missing_description(
    repositories: Sequence[RepositorySummary],
) -> list[Candidate]:
    """
    Flags starred repositories without a description.

    The description is what search results and profile pins show; an empty one
    costs discoverability. Signal: star count.
    """
    candidates = []
    for repo in repositories:
        if repo.fork or (repo.description and repo.description.strip()):
            continue
        candidates.append(
            Candidate(
                rule="missing_description",
                title=f"Describe {repo.full_name} so visitors know what it does",
                signal=repo.stargazers_count,
                link=repo.html_url,
            )
        )
    return candidates


def _detect(
    repositories: Sequence[RepositorySummary], _context: DetectorContext
) -> list[Candidate]:
    return detect_missing_description(repositories)


DETECTOR = DetectorSpec(
    name="missing_description",
    source="repositories",
    detector=_detect,
)
