"""
Lead scoring.

Deterministic, weighted scoring of sales leads plus the labels, tiers and
marker colours derived from a score.
"""

from .lead_score import (
    LeadForScoring,
    ScoreBreakdown,
    ScoreComponents,
    ScoreLabel,
    calculate_lead_score,
    calculate_lead_score_detailed,
    get_marker_color,
    get_score_label,
    get_score_tier,
    is_priority_category,
    recalculate_lead_scores,
)
from .profile import DEFAULT_PRIORITY_CATEGORIES, ScoringProfile, get_default_profile

__all__ = [
    "DEFAULT_PRIORITY_CATEGORIES",
    "LeadForScoring",
    "ScoreBreakdown",
    "ScoreComponents",
    "ScoreLabel",
    "ScoringProfile",
    "calculate_lead_score",
    "calculate_lead_score_detailed",
    "get_default_profile",
    "get_marker_color",
    "get_score_label",
    "get_score_tier",
    "is_priority_category",
    "recalculate_lead_scores",
]
