"""Incomplete profile detector."""

from typing import Sequence

from git_focus.detectors.base import Candidate, DetectorContext, DetectorSpec
from git_focus.models import Profile

# Profile fields worth filling in, with their display labels
PROFILE_FIELDS = {
    "bio": "a bio",
    "blog": "a website",
    "location": "a location",
}


def detect_incomplete_profile(profile: Profile) -> list[Candidate]:
    """Flags empty profile fields. Signal: number of missing fields."""
    missing = [
        label
        for field, label in PROFILE_FIELDS.items()
        if not (getattr(profile, field) or "").strip()
    ]
    if not missing:
        return []
    return [
        Candidate(
            rule="incomplete_profile",
            title=f"Complete your profile: add {', '.join(missing)}",
            signal=len(missing),
            link=f"https://github.com/{profile.login}",
        )
    ]


def _detect(_items: Sequence[Profile], context: DetectorContext) -> list[Candidate]:
    return detect_incomplete_profile(context.profile)


DETECTOR = DetectorSpec(
    name="incomplete_profile",
    source="profile",
    detector=_detect,
)
