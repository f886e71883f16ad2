"""
Data structures shared by the adapter, the analysis engine and the cache.
"""

from datetime import datetime, timezone
from typing import Any, NamedTuple

CATEGORIES = ("health", "work", "growth")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Profile(NamedTuple):
    """Snapshot of a GitHub user profile."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    blog: str | None = None
    twitter_username: str | None = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Profile":
        return cls(
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            company=data.get("company"),
            location=data.get("location"),
            blog=data.get("blog"),
            twitter_username=data.get("twitter_username"),
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            public_repos=data.get("public_repos") or 0,
        )


class RepositorySummary(NamedTuple):
    """A repository as seen by the detectors."""

    name: str
    full_name: str
    fork: bool = False
    description: str | None = None
    license: str | None = None  # SPDX id, None when no license is detected
    stargazers_count: int = 0
    pushed_at: datetime | None = None
    default_branch: str = "main"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.full_name}"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepositorySummary":
        license_info = data.get("license")
        spdx_id = license_info.get("spdx_id") if license_info else None
        return cls(
            name=data["name"],
            full_name=data.get("full_name") or data["name"],
            fork=bool(data.get("fork", False)),
            description=data.get("description"),
            # GitHub reports unrecognized license files as NOASSERTION
            license=spdx_id or ("NOASSERTION" if license_info else None),
            stargazers_count=data.get("stargazers_count") or 0,
            pushed_at=parse_timestamp(data.get("pushed_at")),
            default_branch=data.get("default_branch") or "main",
        )


class ActivityItem(NamedTuple):
    """A pull request or issue authored by the analyzed user."""

    title: str
    url: str
    created_at: datetime | None
    repository_url: str | None = None
    state: str = "open"
    kind: str = "pr"  # "pr" or "issue"

    @property
    def repository_name(self) -> str | None:
        """``owner/name`` derived from the API repository URL."""
        if not self.repository_url:
            return None
        parts = self.repository_url.rstrip("/").split("/")
        if len(parts) < 2:
            return None
        return f"{parts[-2]}/{parts[-1]}"

    @classmethod
    def from_api(cls, data: dict[str, Any], kind: str) -> "ActivityItem":
        return cls(
            title=data.get("title") or "",
            url=data["html_url"],
            created_at=parse_timestamp(data.get("created_at")),
            repository_url=data.get("repository_url"),
            state=data.get("state") or "open",
            kind=kind,
        )


class UserEvent(NamedTuple):
    """An entry of the user's public activity feed."""

    type: str
    created_at: datetime | None
    repository_name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UserEvent":
        repo = data.get("repo") or {}
        return cls(
            type=data.get("type") or "",
            created_at=parse_timestamp(data.get("created_at")),
            repository_name=repo.get("name"),
        )


def parse_search_results(payload: dict[str, Any] | None, kind: str) -> list[ActivityItem]:
    """Normalize a ``{total_count, items}`` search payload."""
    if not payload:
        return []
    return [ActivityItem.from_api(item, kind) for item in payload.get("items") or []]


class Finding(NamedTuple):
    """A single actionable observation about the analyzed account."""

    category: str  # "health", "work" or "growth"
    title: str
    score: float
    link: str | None = None
    rank: int = 0
    detector: str = ""


class AnalysisResult(NamedTuple):
    """The unit of caching and of rendering."""

    profile: Profile
    findings: list[Finding]
    repo_count: int
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile._asdict(),
            "findings": [finding._asdict() for finding in self.findings],
            "repo_count": self.repo_count,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """
        Rebuild a result from ``to_dict`` output.

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed.
        """
        findings = []
        for item in data["findings"]:
            if item["category"] not in CATEGORIES:
                raise ValueError(f"Unknown category: {item['category']}")
            findings.append(
                Finding(
                    category=item["category"],
                    title=item["title"],
                    score=float(item["score"]),
                    link=item.get("link"),
                    rank=int(item.get("rank", 0)),
                    detector=item.get("detector", ""),
                )
            )
        return cls(
            profile=Profile(**data["profile"]),
            findings=findings,
            repo_count=int(data["repo_count"]),
            timestamp=int(data["timestamp"]),
        )
