"""
Core analysis logic for git-focus.
"""

from datetime import datetime, timezone
from typing import Any, NamedTuple, Sequence

from rich.console import Console

from git_focus.cache import CacheState, ResultCache
from git_focus.config import is_repository_excluded
from git_focus.detectors import load_detector_specs
from git_focus.detectors.base import DetectorContext, DetectorSpec
from git_focus.github import GitHubClient
from git_focus.models import (
    ActivityItem,
    AnalysisResult,
    Finding,
    Profile,
    RepositorySummary,
    UserEvent,
)
from git_focus.ranking import rank_findings
from git_focus.scoring import ScoreRule, get_score_rules, score_candidates

console = Console(stderr=True)


class AnalysisOutcome(NamedTuple):
    """An analysis result plus where it came from."""

    result: AnalysisResult
    from_cache: bool = False
    stale: bool = False


def _to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def select_repositories(
    repositories: Sequence[RepositorySummary],
) -> list[RepositorySummary]:
    """Drop forks and repositories excluded in configuration."""
    return [
        repo
        for repo in repositories
        if not repo.fork and not is_repository_excluded(repo.name, repo.full_name)
    ]


def run_detector(
    spec: DetectorSpec,
    items: Sequence[Any],
    context: DetectorContext,
    rules: dict[str, ScoreRule],
) -> list[Finding]:
    """
    Run one detector and score its candidates.

    A failing detector is reported and contributes no findings; it never voids
    the rest of the analysis.
    """
    try:
        candidates = spec.detector(items, context)
        return score_candidates(candidates, rules, detector=spec.name)
    except Exception as e:
        console.print(f"  [yellow]⚠️  {spec.name} detector failed: {e}[/yellow]")
        return []


def analyze_account(
    profile: Profile,
    repositories: Sequence[RepositorySummary] | None = None,
    pull_requests: Sequence[ActivityItem] | None = None,
    issues: Sequence[ActivityItem] | None = None,
    events: Sequence[UserEvent] | None = None,
    now: datetime | None = None,
    detectors: list[DetectorSpec] | None = None,
    rules: dict[str, ScoreRule] | None = None,
) -> AnalysisResult:
    """
    Turn normalized account data into ranked findings.

    Args:
        profile: The analyzed user's profile.
        repositories: The user's repositories. Forks and excluded ones are skipped.
        pull_requests: Open pull requests authored by the user.
        issues: Open issues authored by the user.
        events: Recent public events of the user.
        now: Reference time for age calculations (default: current UTC time).
        detectors: Detectors to run (default: all registered detectors).
        rules: Scoring table (default: configured table).

    Returns:
        AnalysisResult with findings sorted by descending score. Empty input
        yields an empty findings list.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if detectors is None:
        detectors = load_detector_specs()
    if rules is None:
        rules = get_score_rules()

    considered = select_repositories(repositories or [])
    sources: dict[str, Sequence[Any]] = {
        "repositories": considered,
        "pull_requests": list(pull_requests or []),
        "issues": list(issues or []),
        "events": list(events or []),
        "profile": [profile],
    }
    context = DetectorContext(profile=profile, now=now)

    findings: list[Finding] = []
    for spec in detectors:
        items = sources.get(spec.source)
        if items is None:
            console.print(
                f"  [yellow]⚠️  {spec.name}: unknown input '{spec.source}', skipped[/yellow]"
            )
            continue
        findings.extend(run_detector(spec, items, context, rules))

    return AnalysisResult(
        profile=profile,
        findings=rank_findings(findings),
        repo_count=len(considered),
        timestamp=_to_epoch_ms(now),
    )


def fetch_and_analyze(
    username: str,
    client: GitHubClient,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Fetch a user's data from GitHub and analyze it.

    Raises:
        UserNotFoundError: If the profile does not exist.
        DataFetchError: If any request fails.
    """
    profile = client.get_profile(username)
    repositories = client.get_repositories(profile.login)
    pull_requests = client.search_pull_requests(profile.login)
    issues = client.search_issues(profile.login)
    events = client.get_events(profile.login)
    return analyze_account(
        profile, repositories, pull_requests, issues, events=events, now=now
    )


def analyze_user(
    username: str,
    client: GitHubClient | None = None,
    cache: ResultCache | None = None,
    force: bool = False,
    now: datetime | None = None,
) -> AnalysisOutcome:
    """
    Analyze a GitHub user, consulting the result cache first.

    - Fresh cache hit: returned as-is, GitHub is not contacted.
    - Stale cache hit: returned flagged ``stale`` so the caller can offer a
      re-scan.
    - Miss, or ``force``: the entry is invalidated, the pipeline runs, and the
      new result is stored.

    Raises:
        UserNotFoundError: If the profile does not exist. Nothing is cached.
        DataFetchError: If fetching fails.
    """
    if cache is not None and not force:
        lookup = cache.lookup(username, None if now is None else _to_epoch_ms(now))
        if lookup.entry is not None:
            return AnalysisOutcome(
                result=lookup.entry.result,
                from_cache=True,
                stale=lookup.state is CacheState.STALE,
            )

    if cache is not None and force:
        cache.invalidate(username)

    result = fetch_and_analyze(username, client or GitHubClient(), now=now)

    if cache is not None:
        result = cache.put(username, result).result
    return AnalysisOutcome(result=result)
