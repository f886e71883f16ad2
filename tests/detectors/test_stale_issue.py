"""
Tests for the stale_issue detector.
"""

from datetime import timedelta

from git_focus.detectors.stale_issue import detect_stale_issues
from git_focus.models import ActivityItem


class TestStaleIssueDetector:
    """Test the detect_stale_issues function."""

    def test_open_issue_is_reported_with_repository(self, now):
        issue = ActivityItem(
            title="Crash on startup",
            url="https://github.com/other/tool/issues/3",
            created_at=now - timedelta(days=120),
            repository_url="https://api.github.com/repos/other/tool",
            kind="issue",
        )
        candidates = detect_stale_issues([issue], now)
        assert len(candidates) == 1
        assert candidates[0].rule == "stale_issue"
        assert candidates[0].title == "Follow up on issue: Crash on startup (other/tool)"
        assert candidates[0].link == "https://github.com/other/tool/issues/3"
        assert candidates[0].signal == 120

    def test_closed_issue_is_ignored(self, now):
        issue = ActivityItem(
            title="Old",
            url="https://github.com/o/r/issues/1",
            created_at=now - timedelta(days=400),
            state="closed",
            kind="issue",
        )
        assert detect_stale_issues([issue], now) == []

    def test_empty_input(self, now):
        assert detect_stale_issues([], now) == []
