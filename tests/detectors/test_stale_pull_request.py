"""
Tests for the stale_pull_request detector.
"""

from datetime import timedelta

from git_focus.detectors.stale_pull_request import detect_stale_pull_requests
from git_focus.models import ActivityItem


def _pr(now, days: int, state: str = "open", title: str = "Add feature") -> ActivityItem:
    return ActivityItem(
        title=title,
        url="https://github.com/o/r/pull/7",
        created_at=now - timedelta(days=days),
        repository_url="https://api.github.com/repos/o/r",
        state=state,
        kind="pr",
    )


class TestStalePullRequestDetector:
    """Test the detect_stale_pull_requests function."""

    def test_open_pull_request_is_reported(self, pull_requests, now):
        candidates = detect_stale_pull_requests(pull_requests, now)
        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.rule == "stale_pull_request"
        assert candidate.title == "Stale PR: Fix critical bug in parser"
        assert candidate.link == "https://github.com/testuser/popular-lib/pull/1"
        assert candidate.signal == 45

    def test_closed_pull_requests_are_ignored(self, now):
        assert detect_stale_pull_requests([_pr(now, 90, state="closed")], now) == []

    def test_missing_creation_date_is_skipped(self, now):
        pr = _pr(now, 90)._replace(created_at=None)
        assert detect_stale_pull_requests([pr], now) == []

    def test_emission_order_follows_input(self, now):
        candidates = detect_stale_pull_requests(
            [_pr(now, 40, title="first"), _pr(now, 100, title="second")], now
        )
        assert [c.title for c in candidates] == ["Stale PR: first", "Stale PR: second"]
