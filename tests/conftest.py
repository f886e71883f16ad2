"""Shared fixtures mirroring a small GitHub account."""

from datetime import datetime, timedelta, timezone

import pytest

from git_focus import config
from git_focus.models import ActivityItem, Profile, RepositorySummary

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config files and cache directory."""
    monkeypatch.setattr(config, "PROJECT_ROOT", tmp_path / "project")
    monkeypatch.delenv("GIT_FOCUS_CACHE_DIR", raising=False)
    monkeypatch.delenv("GIT_FOCUS_CACHE_TTL", raising=False)
    config.set_cache_dir(tmp_path / "cache")
    config.set_cache_ttl(None)
    yield
    config.set_cache_dir(None)
    config.set_cache_ttl(None)
    config.set_verify_ssl(True)


@pytest.fixture
def profile():
    return Profile(
        login="testuser",
        name="Test User",
        avatar_url="https://avatars.githubusercontent.com/u/1?v=4",
        bio="A test user",
        company=None,
        location="Internet",
        blog="https://example.com",
        twitter_username=None,
        followers=42,
        following=10,
        public_repos=3,
    )


@pytest.fixture
def repositories():
    return [
        RepositorySummary(
            name="popular-lib",
            full_name="testuser/popular-lib",
            fork=False,
            description="A popular library",
            license=None,
            stargazers_count=120,
            pushed_at=NOW - timedelta(days=240),
        ),
        RepositorySummary(
            name="side-project",
            full_name="testuser/side-project",
            fork=False,
            description=None,
            license="MIT",
            stargazers_count=8,
            pushed_at=NOW,
        ),
        RepositorySummary(
            name="fresh-repo",
            full_name="testuser/fresh-repo",
            fork=False,
            description="Just started",
            license="MIT",
            stargazers_count=0,
            pushed_at=NOW,
        ),
    ]


@pytest.fixture
def pull_requests():
    return [
        ActivityItem(
            title="Fix critical bug in parser",
            url="https://github.com/testuser/popular-lib/pull/1",
            created_at=NOW - timedelta(days=45),
            repository_url="https://api.github.com/repos/testuser/popular-lib",
            kind="pr",
        )
    ]
