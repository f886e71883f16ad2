"""
Score normalization for findings.

Every detector reports a raw severity signal (stars, days of inactivity, ...)
and names the rule it belongs to. The rule table below maps that signal onto
the shared 0-5 urgency scale.
"""

import math
from typing import Any, NamedTuple

from git_focus.config import get_scoring_overrides
from git_focus.detectors.base import Candidate
from git_focus.models import CATEGORIES, Finding

MAX_SCORE = 5.0


class ScoreRule(NamedTuple):
    """How one rule's raw signal maps onto a score."""

    category: str
    threshold: float  # signal where a finding starts (below: not a finding)
    saturation: float  # signal where the score reaches max_score
    min_score: float
    max_score: float = MAX_SCORE
    curve: str = "linear"  # "linear" or "log"


# Scoring table:
# - missing_license: stars, 10 stars -> 1.0 up to 1000 stars -> 5.0 (log)
# - stale_repository: days since last push, 180 days -> 1.0 up to 730 days -> 4.0
# - stale_pull_request: PR age in days, 30 days -> 1.5 up to 180 days -> 5.0
# - stale_issue: issue age in days, 60 days -> 1.0 up to 365 days -> 3.5
# - missing_description: stars, 1 star -> 0.5 up to 100 stars -> 2.5 (log)
# - incomplete_profile: missing profile fields, 1 -> 0.5 up to 3 -> 1.5
# - contribution_gap: days since the latest public event, 30 days -> 0.5 up to 365 days -> 2.5
DEFAULT_SCORE_RULES: dict[str, ScoreRule] = {
    "missing_license": ScoreRule("health", 10, 1000, 1.0, 5.0, "log"),
    "stale_repository": ScoreRule("health", 180, 730, 1.0, 4.0),
    "stale_pull_request": ScoreRule("work", 30, 180, 1.5, 5.0),
    "stale_issue": ScoreRule("work", 60, 365, 1.0, 3.5),
    "missing_description": ScoreRule("growth", 1, 100, 0.5, 2.5, "log"),
    "incomplete_profile": ScoreRule("growth", 1, 3, 0.5, 1.5),
    "contribution_gap": ScoreRule("growth", 30, 365, 0.5, 2.5),
}

# Repositories need at least this many stars before inactivity is worth flagging
STALE_REPOSITORY_MIN_STARS = 1

_CURVES = ("linear", "log")
_NUMERIC_FIELDS = ("threshold", "saturation", "min_score", "max_score")


def scale_signal(signal: float, rule: ScoreRule) -> float:
    """
    Map a raw signal onto the 0-5 scale.

    Returns 0.0 (not a finding) when the signal is below the rule threshold.
    Otherwise the score grows from ``min_score`` at the threshold to
    ``max_score`` at the saturation point and stays there.
    """
    if signal < rule.threshold:
        return 0.0

    if rule.saturation <= rule.threshold:
        fraction = 1.0
    elif rule.curve == "log" and rule.threshold > 0:
        fraction = math.log(signal / rule.threshold) / math.log(
            rule.saturation / rule.threshold
        )
    else:
        fraction = (signal - rule.threshold) / (rule.saturation - rule.threshold)

    fraction = min(max(fraction, 0.0), 1.0)
    score = rule.min_score + (rule.max_score - rule.min_score) * fraction
    score = min(score, rule.max_score, MAX_SCORE)
    return round(max(score, 0.0), 2)


def build_score_rules(
    overrides: dict[str, dict[str, Any]] | None = None,
) -> dict[str, ScoreRule]:
    """
    Apply scoring overrides on top of the default table.

    Args:
        overrides: Rule name -> partial rule fields, as loaded from config.

    Raises:
        ValueError: If an override names an unknown rule, an unknown field or an
            invalid value.
    """
    rules = dict(DEFAULT_SCORE_RULES)
    if not overrides:
        return rules

    for rule_name, fields in overrides.items():
        if rule_name not in rules:
            known = ", ".join(sorted(rules))
            raise ValueError(
                f"Unknown scoring rule '{rule_name}'. Available: {known}"
            )
        if not isinstance(fields, dict):
            raise ValueError(f"Scoring rule '{rule_name}' should be a table.")

        unknown_fields = set(fields) - set(ScoreRule._fields)
        if unknown_fields:
            raise ValueError(
                f"Scoring rule '{rule_name}' includes unknown fields: "
                f"{', '.join(sorted(unknown_fields))}."
            )

        for field in _NUMERIC_FIELDS:
            value = fields.get(field)
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, (int, float))
            ):
                raise ValueError(
                    f"Scoring rule '{rule_name}' field '{field}' must be a number, "
                    f"got {value!r}."
                )

        rule = rules[rule_name]._replace(**fields)
        if rule.category not in CATEGORIES:
            raise ValueError(
                f"Scoring rule '{rule_name}' has invalid category '{rule.category}'."
            )
        if rule.curve not in _CURVES:
            raise ValueError(
                f"Scoring rule '{rule_name}' has invalid curve '{rule.curve}'."
            )
        if not 0 < rule.min_score <= rule.max_score <= MAX_SCORE:
            raise ValueError(
                f"Scoring rule '{rule_name}' needs 0 < min_score <= max_score <= {MAX_SCORE}."
            )
        rules[rule_name] = rule

    return rules


def get_score_rules() -> dict[str, ScoreRule]:
    """Return the scoring table with configured overrides applied."""
    return build_score_rules(get_scoring_overrides())


def score_candidate(
    candidate: Candidate, rules: dict[str, ScoreRule], detector: str = ""
) -> Finding | None:
    """
    Turn a detector candidate into a scored finding.

    Returns None when the candidate scores 0 (not a finding).

    Raises:
        KeyError: If the candidate names a rule missing from the table.
    """
    rule = rules[candidate.rule]
    score = scale_signal(candidate.signal, rule)
    if score <= 0:
        return None
    return Finding(
        category=rule.category,
        title=candidate.title,
        score=score,
        link=candidate.link,
        detector=detector or candidate.rule,
    )


def score_candidates(
    candidates: list[Candidate],
    rules: dict[str, ScoreRule] | None = None,
    detector: str = "",
) -> list[Finding]:
    """Score candidates in emission order, dropping the ones that score 0."""
    if rules is None:
        rules = get_score_rules()
    findings = []
    for candidate in candidates:
        finding = score_candidate(candidate, rules, detector)
        if finding is not None:
            findings.append(finding)
    return findings


def summarize_categories(findings: list[Finding]) -> dict[str, dict[str, Any]]:
    """
    Build the per-category score cards.

    Returns:
        Category -> {"count": int, "top_score": float, "total": float} for all
        three categories, in display order.
    """
    summary: dict[str, dict[str, Any]] = {
        category: {"count": 0, "top_score": 0.0, "total": 0.0}
        for category in CATEGORIES
    }
    for finding in findings:
        card = summary.get(finding.category)
        if card is None:
            continue
        card["count"] += 1
        card["top_score"] = max(card["top_score"], finding.score)
        card["total"] = round(card["total"] + finding.score, 2)
    return summary
