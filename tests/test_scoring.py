"""
Tests for score normalization.
"""

import pytest

from git_focus import config
from git_focus.detectors.base import Candidate
from git_focus.models import Finding
from git_focus.scoring import (
    DEFAULT_SCORE_RULES,
    MAX_SCORE,
    ScoreRule,
    build_score_rules,
    get_score_rules,
    scale_signal,
    score_candidate,
    score_candidates,
    summarize_categories,
)


class TestScaleSignal:
    """Test scale_signal against the default table."""

    def test_below_threshold_is_not_a_finding(self):
        assert scale_signal(9, DEFAULT_SCORE_RULES["missing_license"]) == 0.0
        assert scale_signal(29, DEFAULT_SCORE_RULES["stale_pull_request"]) == 0.0

    def test_threshold_gives_min_score(self):
        assert scale_signal(10, DEFAULT_SCORE_RULES["missing_license"]) == 1.0
        assert scale_signal(30, DEFAULT_SCORE_RULES["stale_pull_request"]) == 1.5

    def test_known_values(self):
        assert scale_signal(120, DEFAULT_SCORE_RULES["missing_license"]) == 3.16
        assert scale_signal(45, DEFAULT_SCORE_RULES["stale_pull_request"]) == 1.85
        assert scale_signal(240, DEFAULT_SCORE_RULES["stale_repository"]) == 1.33

    def test_saturates_at_maximum(self):
        rule = DEFAULT_SCORE_RULES["missing_license"]
        assert scale_signal(1000, rule) == 5.0
        assert scale_signal(10**9, rule) == 5.0

    @pytest.mark.parametrize("rule_name", sorted(DEFAULT_SCORE_RULES))
    def test_monotonic_and_bounded(self, rule_name):
        rule = DEFAULT_SCORE_RULES[rule_name]
        signals = [0, 1, 2, 5, 10, 29, 30, 45, 60, 100, 120, 180, 240, 365, 730, 5000]
        scores = [scale_signal(signal, rule) for signal in signals]
        assert scores == sorted(scores)
        assert all(0 <= score <= MAX_SCORE for score in scores)

    def test_clamps_to_global_maximum(self):
        rule = ScoreRule("health", 1, 10, 1.0, 9.0)
        assert scale_signal(10, rule) == MAX_SCORE

    def test_degenerate_range(self):
        rule = ScoreRule("work", 5, 5, 2.0, 3.0)
        assert scale_signal(5, rule) == 3.0


class TestScoreRules:
    """Test scoring overrides."""

    def test_no_overrides_returns_defaults(self):
        assert build_score_rules(None) == DEFAULT_SCORE_RULES

    def test_partial_override(self):
        rules = build_score_rules({"stale_pull_request": {"threshold": 14}})
        assert rules["stale_pull_request"].threshold == 14
        assert rules["stale_pull_request"].category == "work"
        assert DEFAULT_SCORE_RULES["stale_pull_request"].threshold == 30

    def test_unknown_rule(self):
        with pytest.raises(ValueError, match="Unknown scoring rule"):
            build_score_rules({"nope": {"threshold": 1}})

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="unknown fields"):
            build_score_rules({"stale_issue": {"weight": 2}})

    def test_invalid_category(self):
        with pytest.raises(ValueError, match="invalid category"):
            build_score_rules({"stale_issue": {"category": "urgent"}})

    def test_max_score_above_scale(self):
        with pytest.raises(ValueError, match="max_score"):
            build_score_rules({"stale_issue": {"max_score": 7.0}})

    @pytest.mark.parametrize("value", ["14", True, [14]])
    def test_non_numeric_value(self, value):
        with pytest.raises(ValueError, match="must be a number"):
            build_score_rules({"stale_pull_request": {"threshold": value}})

    def test_overrides_from_config(self, tmp_path, monkeypatch):
        project = tmp_path / "proj"
        project.mkdir()
        (project / ".git-focus.toml").write_text(
            """
[tool.git-focus.scoring.missing_license]
threshold = 50
"""
        )
        monkeypatch.setattr(config, "PROJECT_ROOT", project)
        assert get_score_rules()["missing_license"].threshold == 50


class TestScoreCandidates:
    """Test the candidate -> finding step."""

    def test_candidate_becomes_finding(self):
        finding = score_candidate(
            Candidate("missing_license", "Add a license to u/r", 120, "https://x"),
            DEFAULT_SCORE_RULES,
            detector="missing_license",
        )
        assert finding == Finding(
            category="health",
            title="Add a license to u/r",
            score=3.16,
            link="https://x",
            rank=0,
            detector="missing_license",
        )

    def test_zero_scores_are_dropped(self):
        candidates = [
            Candidate("stale_pull_request", "Stale PR: new", 2),
            Candidate("stale_pull_request", "Stale PR: old", 60),
        ]
        findings = score_candidates(candidates, DEFAULT_SCORE_RULES)
        assert [f.title for f in findings] == ["Stale PR: old"]

    def test_unknown_rule_raises(self):
        with pytest.raises(KeyError):
            score_candidate(Candidate("unknown", "t", 1), DEFAULT_SCORE_RULES)


def test_summarize_categories():
    findings = [
        Finding("health", "a", 3.0),
        Finding("health", "b", 1.5),
        Finding("work", "c", 2.0),
    ]
    summary = summarize_categories(findings)
    assert list(summary) == ["health", "work", "growth"]
    assert summary["health"] == {"count": 2, "top_score": 3.0, "total": 4.5}
    assert summary["work"]["count"] == 1
    assert summary["growth"] == {"count": 0, "top_score": 0.0, "total": 0.0}
