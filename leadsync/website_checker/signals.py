"""
Quality signal extraction from a fetched web page.

Signals are collected from the parsed HTML with BeautifulSoup plus a few
regular expressions for contact details that are usually written as plain
text rather than markup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
ADDRESS_RE = re.compile(
    r"\b\d{1,6}\s+[A-Za-z0-9.\s]{2,40}\b"
    r"(?:street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|suite|ste)\b",
    re.IGNORECASE,
)
COPYRIGHT_RE = re.compile(r"(?:©|&copy;|copyright)\s*(?:\d{4}\s*[-–]\s*)?(\d{4})", re.IGNORECASE)

STACK_MARKERS = (
    ("wordpress", ("wp-content", "wordpress")),
    ("wix", ("wix.com", "wixsite")),
    ("squarespace", ("squarespace",)),
    ("joomla", ("joomla",)),
    ("weebly", ("weebly",)),
)


@dataclass
class SiteSignals:
    """Observable quality signals of a single page."""

    https: bool = False
    has_viewport: bool = False
    title: Optional[str] = None
    has_meta_description: bool = False
    has_h1: bool = False
    has_lang: bool = False
    total_images: int = 0
    images_with_alt: int = 0
    has_email: bool = False
    has_phone: bool = False
    has_address: bool = False
    copyright_year: Optional[int] = None
    stack_hint: Optional[str] = None
    response_time_ms: float = 0.0

    @property
    def alt_coverage(self) -> float:
        """Share of images carrying a non-empty alt text (1.0 without images)."""
        if self.total_images == 0:
            return 1.0
        return self.images_with_alt / self.total_images


def detect_stack(html: str) -> Optional[str]:
    lowered = html.lower()
    for name, markers in STACK_MARKERS:
        if any(marker in lowered for marker in markers):
            return name
    return None


def extract_signals(html: str, final_url: str, response_time_ms: float = 0.0) -> SiteSignals:
    """Collect the quality signals of a page.

    Args:
        html: Page body
        final_url: URL after redirects; decides the HTTPS signal
        response_time_ms: Time the fetch took

    Returns:
        Populated SiteSignals
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else None

    description = soup.find("meta", attrs={"name": re.compile("^description$", re.IGNORECASE)})
    html_tag = soup.find("html")
    images = soup.find_all("img")

    text = soup.get_text(separator=" ", strip=True)
    mailto = soup.find("a", href=re.compile(r"^mailto:", re.IGNORECASE))
    tel = soup.find("a", href=re.compile(r"^tel:", re.IGNORECASE))

    years = [int(y) for y in COPYRIGHT_RE.findall(text)]

    return SiteSignals(
        https=final_url.lower().startswith("https://"),
        has_viewport=soup.find("meta", attrs={"name": re.compile("^viewport$", re.IGNORECASE)}) is not None,
        title=title or None,
        has_meta_description=bool(description and (description.get("content") or "").strip()),
        has_h1=soup.find("h1") is not None,
        has_lang=bool(html_tag and (html_tag.get("lang") or "").strip()),
        total_images=len(images),
        images_with_alt=sum(1 for img in images if (img.get("alt") or "").strip()),
        has_email=bool(mailto or EMAIL_RE.search(text)),
        has_phone=bool(tel or PHONE_RE.search(text)),
        has_address=bool(ADDRESS_RE.search(text)),
        copyright_year=max(years) if years else None,
        stack_hint=detect_stack(html),
        response_time_ms=response_time_ms,
    )
