"""
GitHub data adapter for git-focus.

Fetches a user's profile, repositories, open pull requests / issues and recent
public events from the GitHub REST API and normalizes them into the records the
detectors consume.
"""

import os
from typing import Any

import httpx
from dotenv import load_dotenv

from git_focus.errors import DataFetchError, UserNotFoundError
from git_focus.http_client import _get_http_client
from git_focus.models import (
    ActivityItem,
    Profile,
    RepositorySummary,
    UserEvent,
    parse_search_results,
)

# Load environment variables
load_dotenv()

GITHUB_API = "https://api.github.com"

REPOS_PER_PAGE = 100
# Upper bound on repository pages (1000 repositories)
MAX_REPO_PAGES = 10
SEARCH_PER_PAGE = 100
EVENTS_PER_PAGE = 100


class GitHubClient:
    """Thin REST client for the data the analysis needs."""

    def __init__(self, token: str | None = None, api_url: str = GITHUB_API):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub access token. If not provided, reads from the
                   GITHUB_TOKEN environment variable. Anonymous access works
                   for public data but is heavily rate limited.
            api_url: Base URL of the REST API.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.api_url = api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document from the API.

        Raises:
            DataFetchError: On transport errors or non-2xx responses.
        """
        client = _get_http_client()
        try:
            response = client.get(
                f"{self.api_url}{path}", params=params, headers=self._headers()
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (403, 429):
                raise DataFetchError(
                    f"GitHub API rate limit or permission error ({status}) for {path}. "
                    "Set GITHUB_TOKEN or retry later."
                ) from e
            raise DataFetchError(f"GitHub API error ({status}) for {path}") from e
        except httpx.RequestError as e:
            raise DataFetchError(f"GitHub API request failed for {path}: {e}") from e
        except ValueError as e:
            # 2xx with a non-JSON body, e.g. a proxy error page
            raise DataFetchError(f"GitHub API returned invalid JSON for {path}") from e

    def get_profile(self, username: str) -> Profile:
        """
        Fetch a user's profile.

        Raises:
            UserNotFoundError: If the user does not exist.
            DataFetchError: On any other failure.
        """
        try:
            data = self._get(f"/users/{username}")
        except DataFetchError as e:
            cause = e.__cause__
            if (
                isinstance(cause, httpx.HTTPStatusError)
                and cause.response.status_code == 404
            ):
                raise UserNotFoundError(username) from cause
            raise
        return Profile.from_api(data)

    def get_repositories(self, username: str) -> list[RepositorySummary]:
        """Fetch all public repositories owned by the user, most recently pushed first."""
        repositories: list[RepositorySummary] = []
        for page in range(1, MAX_REPO_PAGES + 1):
            batch = self._get(
                f"/users/{username}/repos",
                params={
                    "per_page": REPOS_PER_PAGE,
                    "page": page,
                    "sort": "pushed",
                    "type": "owner",
                },
            )
            if not isinstance(batch, list):
                break
            repositories.extend(RepositorySummary.from_api(item) for item in batch)
            if len(batch) < REPOS_PER_PAGE:
                break
        return repositories

    def get_events(self, username: str) -> list[UserEvent]:
        """The user's most recent public events (one page, newest first)."""
        payload = self._get(
            f"/users/{username}/events", params={"per_page": EVENTS_PER_PAGE}
        )
        if not isinstance(payload, list):
            return []
        return [UserEvent.from_api(item) for item in payload]

    def _search(self, query: str, kind: str) -> list[ActivityItem]:
        payload = self._get(
            "/search/issues",
            params={"q": query, "per_page": SEARCH_PER_PAGE, "sort": "created"},
        )
        return parse_search_results(payload, kind)

    def search_pull_requests(self, username: str) -> list[ActivityItem]:
        """Open pull requests authored by the user."""
        return self._search(f"author:{username} type:pr is:open", "pr")

    def search_issues(self, username: str) -> list[ActivityItem]:
        """Open issues authored by the user."""
        return self._search(f"author:{username} type:issue is:open", "issue")
