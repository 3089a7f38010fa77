"""Website quality assessment for prospects."""

from .checker import WebsiteChecker, WebsiteCheckResult, normalize_url
from .scoring import quality_from_score, score_signals
from .signals import SiteSignals, extract_signals

__all__ = [
    "SiteSignals",
    "WebsiteCheckResult",
    "WebsiteChecker",
    "extract_signals",
    "normalize_url",
    "quality_from_score",
    "score_signals",
]
