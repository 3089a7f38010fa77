"""
Lead scoring engine.

Scores a prospect from 0 to 100. A higher score means a better opportunity
for the agency: a weak or missing website, a budget that can afford a
project, a mission in one of the priority categories and a nearby location.

Point table:

================  ======================================================
factor            points
================  ======================================================
website           none 30, POOR 25, FAIR 15, GOOD 5, EXCELLENT 0, unknown 20
revenue           >=1M 25, >=500k 20, >=100k 15, >=50k 10, else 5, missing 12
category          priority 20, other 10, missing 10
location          home city 15, home state 12, target state 7, else 3
employees         >=50 10, >=20 7, >=10 5, else 3, missing 5
contact bonus     +5 when an email or phone is known
outreach penalty  -10 when emails were sent and the lead is not converted
================  ======================================================

A converted lead always scores 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from leadsync.core.models.domain import ScoreTier, WebsiteQuality

from .profile import ScoringProfile, get_default_profile

WEBSITE_QUALITY_POINTS: Dict[str, int] = {
    WebsiteQuality.poor.value: 25,
    WebsiteQuality.fair.value: 15,
    WebsiteQuality.good.value: 5,
    WebsiteQuality.excellent.value: 0,
}
NO_WEBSITE_POINTS = 30
UNKNOWN_QUALITY_POINTS = 20

UNKNOWN_REVENUE_POINTS = 12
UNKNOWN_EMPLOYEE_POINTS = 5
CATEGORY_PRIORITY_POINTS = 20
CATEGORY_DEFAULT_POINTS = 10

CONTACT_BONUS = 5
OUTREACH_PENALTY = 10

TIER_MARKER_COLORS: Dict[ScoreTier, str] = {
    ScoreTier.hot: "#ef4444",
    ScoreTier.warm: "#f59e0b",
    ScoreTier.cool: "#fb923c",
    ScoreTier.cold: "#94a3b8",
}


@dataclass
class LeadForScoring:
    """Plain bundle of the lead facts the scoring engine reads.

    Any object exposing the same attribute names (for example the ``Lead``
    entity) can be scored directly.
    """

    has_website: bool = False
    website_quality: Optional[str] = None
    annual_revenue: Optional[int] = None
    category: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    employee_count: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    emails_sent: int = 0
    converted_at: Optional[datetime] = None


class ScoreComponents(BaseModel):
    """Points earned per factor."""

    website: int = 0
    revenue: int = 0
    category: int = 0
    location: int = 0
    size: int = 0
    contact_bonus: int = 0
    outreach_penalty: int = 0


class ScoreBreakdown(BaseModel):
    """Detailed score with per-factor points and an outreach recommendation."""

    total: int
    breakdown: ScoreComponents
    recommendation: str


class ScoreLabel(BaseModel):
    """Human readable label and badge colour of a score."""

    label: str
    color: str


def _quality_value(quality: Any) -> Optional[str]:
    if isinstance(quality, WebsiteQuality):
        return quality.value
    return quality


def website_points(lead: Any) -> int:
    if not getattr(lead, "has_website", False):
        return NO_WEBSITE_POINTS
    quality = _quality_value(getattr(lead, "website_quality", None))
    return WEBSITE_QUALITY_POINTS.get(quality, UNKNOWN_QUALITY_POINTS)


def revenue_points(lead: Any) -> int:
    revenue = getattr(lead, "annual_revenue", None)
    if not revenue:
        return UNKNOWN_REVENUE_POINTS
    if revenue >= 1_000_000:
        return 25
    if revenue >= 500_000:
        return 20
    if revenue >= 100_000:
        return 15
    if revenue >= 50_000:
        return 10
    return 5


def is_priority_category(category: Optional[str], profile: ScoringProfile) -> bool:
    """Check whether a category overlaps a priority category.

    The match is a case-insensitive substring test in either direction, so
    "Youth" matches "Youth Development" and "Mental Health Services" matches
    "Mental Health".
    """
    if not category:
        return False
    lowered = category.lower()
    return any(cat.lower() in lowered or lowered in cat.lower() for cat in profile.priority_categories)


def category_points(lead: Any, profile: ScoringProfile) -> int:
    if is_priority_category(getattr(lead, "category", None), profile):
        return CATEGORY_PRIORITY_POINTS
    return CATEGORY_DEFAULT_POINTS


def location_points(lead: Any, profile: ScoringProfile) -> int:
    city = getattr(lead, "city", None)
    state = getattr(lead, "state", None)
    state_upper = state.upper() if state else None

    city_match = bool(city) and city.lower() == profile.home_city.lower()
    state_match = state_upper == profile.home_state.upper()

    if city_match and state_match:
        return 15
    if state_match:
        return 12
    if state_upper and state_upper in profile.target_states:
        return 7
    return 3


def size_points(lead: Any) -> int:
    employees = getattr(lead, "employee_count", None)
    if not employees:
        return UNKNOWN_EMPLOYEE_POINTS
    if employees >= 50:
        return 10
    if employees >= 20:
        return 7
    if employees >= 10:
        return 5
    return 3


def _components(lead: Any, profile: ScoringProfile) -> ScoreComponents:
    has_contact = bool(getattr(lead, "email", None) or getattr(lead, "phone", None))
    emails_sent = getattr(lead, "emails_sent", 0) or 0
    return ScoreComponents(
        website=website_points(lead),
        revenue=revenue_points(lead),
        category=category_points(lead, profile),
        location=location_points(lead, profile),
        size=size_points(lead),
        contact_bonus=CONTACT_BONUS if has_contact else 0,
        outreach_penalty=-OUTREACH_PENALTY if emails_sent > 0 else 0,
    )


def _clamp(score: int) -> int:
    return min(100, max(0, score))


def calculate_lead_score(lead: Any, profile: Optional[ScoringProfile] = None) -> int:
    """Calculate the 0-100 opportunity score of a lead.

    Args:
        lead: A ``LeadForScoring`` or any object with the same attributes
        profile: Scoring preferences; defaults to the settings-derived profile

    Returns:
        Integer score clamped to [0, 100]; 0 for converted leads
    """
    if getattr(lead, "converted_at", None):
        return 0
    parts = _components(lead, profile or get_default_profile())
    return _clamp(sum(parts.model_dump().values()))


def recommendation_for(score: int) -> str:
    if score >= 80:
        return "High priority - reach out immediately"
    if score >= 60:
        return "Good prospect - add to outreach queue"
    if score >= 40:
        return "Worth pursuing - gather more info"
    return "Lower priority - may not be ideal fit"


def calculate_lead_score_detailed(lead: Any, profile: Optional[ScoringProfile] = None) -> ScoreBreakdown:
    """Calculate the score with a per-factor breakdown.

    The total always equals :func:`calculate_lead_score` for the same lead,
    contact bonus and outreach penalty included.
    """
    if getattr(lead, "converted_at", None):
        return ScoreBreakdown(total=0, breakdown=ScoreComponents(), recommendation="Already converted to client")

    parts = _components(lead, profile or get_default_profile())
    total = _clamp(sum(parts.model_dump().values()))
    return ScoreBreakdown(total=total, breakdown=parts, recommendation=recommendation_for(total))


def get_score_label(score: int) -> ScoreLabel:
    if score >= 90:
        return ScoreLabel(label="Hot Lead", color="red")
    if score >= 80:
        return ScoreLabel(label="Warm Lead", color="orange")
    if score >= 70:
        return ScoreLabel(label="Good Lead", color="yellow")
    if score >= 60:
        return ScoreLabel(label="Warm Lead", color="amber")
    if score >= 40:
        return ScoreLabel(label="Cool Lead", color="orange")
    return ScoreLabel(label="Cold Lead", color="slate")


def get_score_tier(score: int) -> ScoreTier:
    if score >= 80:
        return ScoreTier.hot
    if score >= 60:
        return ScoreTier.warm
    if score >= 40:
        return ScoreTier.cool
    return ScoreTier.cold


def get_marker_color(score: int) -> str:
    """Map marker colour for a score (red, amber, orange or grey by tier)."""
    return TIER_MARKER_COLORS[get_score_tier(score)]


def recalculate_lead_scores(leads: Iterable[Any], profile: Optional[ScoringProfile] = None) -> Dict[int, int]:
    """Score a batch of leads.

    Returns:
        Mapping of input position to score
    """
    profile = profile or get_default_profile()
    return {index: calculate_lead_score(lead, profile) for index, lead in enumerate(leads)}
