"""Merging and ranking of findings."""

from typing import Iterable

from git_focus.models import CATEGORIES, Finding
from git_focus.scoring import MAX_SCORE


def rank_findings(findings: Iterable[Finding]) -> list[Finding]:
    """
    Sort findings by descending score and assign 1-based ranks.

    The sort is stable, so equal scores keep detector registration order and
    then emission order. Findings scoring outside (0, 5] or carrying an unknown
    category are not findings and are dropped. Findings for the same
    repository from different detectors are kept apart.
    """
    valid = [
        finding
        for finding in findings
        if 0 < finding.score <= MAX_SCORE and finding.category in CATEGORIES
    ]
    ordered = sorted(valid, key=lambda finding: finding.score, reverse=True)
    return [
        finding._replace(rank=position)
        for position, finding in enumerate(ordered, start=1)
    ]
