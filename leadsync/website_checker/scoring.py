"""
Deterministic website quality scoring.

Scores start at 100 and lose points for each missing basic. The result is
explainable: every deduction adds a human readable reason. A lower score
means a worse site and therefore a better lead.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from leadsync.core.models.domain import WebsiteQuality

from .signals import SiteSignals

SLOW_RESPONSE_MS = 3000
STALE_COPYRIGHT_YEARS = 3
MIN_ALT_COVERAGE = 0.8
LEGACY_STACKS = ("joomla", "weebly")


def score_signals(signals: SiteSignals, *, current_year: Optional[int] = None) -> Tuple[int, List[str]]:
    """Score page signals.

    Args:
        signals: Extracted page signals
        current_year: Year used to age the copyright notice (defaults to today)

    Returns:
        ``(score, reasons)`` with the score clamped to [0, 100]
    """
    year = current_year or date.today().year
    score = 100
    reasons: List[str] = []

    if not signals.https:
        score -= 20
        reasons.append("Site is not served over HTTPS.")

    if not signals.has_viewport:
        score -= 15
        reasons.append("Missing mobile viewport meta tag (likely not mobile-optimized).")

    if not signals.title:
        score -= 5
        reasons.append("Missing <title> tag.")

    if not signals.has_meta_description:
        score -= 5
        reasons.append("Missing meta description.")

    if not signals.has_h1:
        score -= 5
        reasons.append("No <h1> heading.")

    if not signals.has_lang:
        score -= 5
        reasons.append("Missing lang attribute on <html>.")

    if signals.total_images and signals.alt_coverage < MIN_ALT_COVERAGE:
        score -= 10
        reasons.append(f"Only {signals.images_with_alt} of {signals.total_images} images have alt text.")

    missing = [
        name
        for name, present in (
            ("phone", signals.has_phone),
            ("email", signals.has_email),
            ("address", signals.has_address),
        )
        if not present
    ]
    if len(missing) >= 2:
        score -= 10
        reasons.append(f"Contact info is hard to find (missing {', '.join(missing)}).")

    if signals.copyright_year is not None and year - signals.copyright_year >= STALE_COPYRIGHT_YEARS:
        score -= 10
        reasons.append(f"Copyright notice is out of date ({signals.copyright_year}).")

    if signals.response_time_ms > SLOW_RESPONSE_MS:
        score -= 10
        reasons.append(f"Slow response ({signals.response_time_ms / 1000:.1f}s).")

    if signals.stack_hint in LEGACY_STACKS:
        score -= 3
        reasons.append(f"Built on {signals.stack_hint}, a legacy site builder.")

    return max(0, min(100, score)), reasons


def quality_from_score(score: int) -> WebsiteQuality:
    if score >= 85:
        return WebsiteQuality.excellent
    if score >= 65:
        return WebsiteQuality.good
    if score >= 40:
        return WebsiteQuality.fair
    return WebsiteQuality.poor
