"""Location and category preferences the lead score is measured against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_PRIORITY_CATEGORIES: Tuple[str, ...] = (
    "Healthcare",
    "Mental Health",
    "Education",
    "Community Development",
    "Social Services",
    "Family Services",
    "Youth Development",
    "Substance Abuse",
    "Housing",
    "Food Security",
)


@dataclass(frozen=True)
class ScoringProfile:
    """Home market and mission fit used by the scoring engine.

    Attributes:
        home_city: City scored as local (case-insensitive)
        home_state: Two letter state code scored as home state
        target_states: Regional states that still earn location points
        priority_categories: Nonprofit categories the agency specialises in
    """

    home_city: str = "Louisville"
    home_state: str = "KY"
    target_states: Tuple[str, ...] = ("KY", "IN", "OH", "TN", "WV")
    priority_categories: Tuple[str, ...] = field(default=DEFAULT_PRIORITY_CATEGORIES)

    @classmethod
    def from_settings(cls) -> "ScoringProfile":
        """Build the profile from the ``SCORING_*`` settings."""
        from leadsync.server.core.config import settings

        scoring = settings.scoring
        return cls(
            home_city=scoring.home_city,
            home_state=scoring.home_state.upper(),
            target_states=tuple(scoring.target_state_list),
        )


_default_profile: Optional[ScoringProfile] = None


def get_default_profile() -> ScoringProfile:
    """Return the settings-derived profile, built on first use."""
    global _default_profile
    if _default_profile is None:
        _default_profile = ScoringProfile.from_settings()
    return _default_profile
