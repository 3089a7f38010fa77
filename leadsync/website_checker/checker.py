"""
Website checker.

Fetches a prospect's website and grades it into a ``WebsiteQuality``. An
unreachable site is graded POOR with score 0.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

from leadsync.core.models.domain import WebsiteQuality

from .scoring import quality_from_score, score_signals
from .signals import extract_signals

USER_AGENT = "Mozilla/5.0 (compatible; LeadsyncSiteCheck/1.0)"


class WebsiteCheckResult(BaseModel):
    """Outcome of a website check."""

    url: str
    final_url: Optional[str] = None
    reachable: bool
    status_code: Optional[int] = None
    score: int
    quality: WebsiteQuality
    reasons: List[str] = Field(default_factory=list)
    stack_hint: Optional[str] = None
    response_time_ms: Optional[float] = None


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Add ``https://`` to a bare host; ``None`` for empty input."""
    if not url or not url.strip():
        return None
    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    return url


class WebsiteChecker:
    """Fetch and grade websites.

    Args:
        client: Optional shared ``httpx.AsyncClient``; one is created when omitted
        timeout: Request timeout in seconds
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0) -> None:
        self._http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._timeout = timeout
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _unreachable(self, url: str, reason: str, status_code: Optional[int] = None) -> WebsiteCheckResult:
        return WebsiteCheckResult(
            url=url,
            reachable=False,
            status_code=status_code,
            score=0,
            quality=WebsiteQuality.poor,
            reasons=[f"unreachable: {reason}"],
        )

    async def check(self, url: str) -> WebsiteCheckResult:
        target = normalize_url(url)
        if target is None:
            return self._unreachable(url or "", "no url")

        self._logger.debug("WebsiteChecker.check: GET %s", target)
        start = time.monotonic()
        try:
            r = await self._http.get(
                target,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.warning("Website check failed for %s: %s", target, e)
            return self._unreachable(target, type(e).__name__)
        elapsed_ms = (time.monotonic() - start) * 1000

        if r.status_code >= 400:
            self._logger.info("Website %s answered %s", target, r.status_code)
            return self._unreachable(target, f"HTTP {r.status_code}", status_code=r.status_code)

        final_url = str(r.url)
        signals = extract_signals(r.text, final_url, elapsed_ms)
        score, reasons = score_signals(signals)
        quality = quality_from_score(score)
        self._logger.debug("WebsiteChecker.check: %s scored %s (%s)", final_url, score, quality.value)
        return WebsiteCheckResult(
            url=target,
            final_url=final_url,
            reachable=True,
            status_code=r.status_code,
            score=score,
            quality=quality,
            reasons=reasons,
            stack_hint=signals.stack_hint,
            response_time_ms=round(elapsed_ms, 1),
        )
