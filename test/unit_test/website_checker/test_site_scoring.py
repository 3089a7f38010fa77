"""Unit tests for website signal extraction and quality scoring."""

from __future__ import annotations

import pytest

from leadsync.core.models.domain import WebsiteQuality
from leadsync.website_checker import SiteSignals, extract_signals, quality_from_score, score_signals
from leadsync.website_checker.signals import detect_stack

MODERN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Hope Center Louisville</title>
  <meta name="description" content="Housing and food support in Louisville.">
</head>
<body>
  <h1>Hope Center</h1>
  <img src="/a.jpg" alt="Volunteers">
  <img src="/b.jpg" alt="Food pantry">
  <p>Call us at (502) 555-0100 or <a href="mailto:info@hope.org">email us</a>.</p>
  <p>1200 Main Street, Louisville, KY</p>
  <footer>&copy; 2026 Hope Center</footer>
</body>
</html>"""

LEGACY_PAGE = """<html>
<body>
  <div class="weebly-header">Welcome</div>
  <img src="/a.gif"><img src="/b.gif"><img src="/c.gif" alt="">
  <p>Copyright 2016 Our Church</p>
</body>
</html>"""


def _perfect_signals(**overrides) -> SiteSignals:
    values = dict(
        https=True,
        has_viewport=True,
        title="Home",
        has_meta_description=True,
        has_h1=True,
        has_lang=True,
        has_email=True,
        has_phone=True,
        has_address=True,
        copyright_year=2026,
        response_time_ms=200.0,
    )
    values.update(overrides)
    return SiteSignals(**values)


class TestExtractSignals:
    def test_modern_page(self):
        signals = extract_signals(MODERN_PAGE, "https://hope.example.org/", 120.0)

        assert signals.https is True
        assert signals.has_viewport is True
        assert signals.title == "Hope Center Louisville"
        assert signals.has_meta_description is True
        assert signals.has_h1 is True
        assert signals.has_lang is True
        assert (signals.total_images, signals.images_with_alt) == (2, 2)
        assert signals.has_email is True
        assert signals.has_phone is True
        assert signals.has_address is True
        assert signals.copyright_year == 2026
        assert signals.stack_hint is None
        assert signals.response_time_ms == 120.0

    def test_legacy_page(self):
        signals = extract_signals(LEGACY_PAGE, "http://church.example.org/")

        assert signals.https is False
        assert signals.has_viewport is False
        assert signals.title is None
        assert signals.has_lang is False
        assert (signals.total_images, signals.images_with_alt) == (3, 0)
        assert signals.alt_coverage == 0.0
        assert not (signals.has_email or signals.has_phone or signals.has_address)
        assert signals.copyright_year == 2016
        assert signals.stack_hint == "weebly"

    def test_alt_coverage_without_images(self):
        assert SiteSignals().alt_coverage == 1.0

    @pytest.mark.parametrize(
        "html, stack",
        [
            ('<link href="/wp-content/themes/x.css">', "wordpress"),
            ("<script src='https://static.wixsite.com/x.js'></script>", "wix"),
            ("<!-- This is Squarespace. -->", "squarespace"),
            ('<meta name="generator" content="Joomla! 3">', "joomla"),
            ("<p>plain</p>", None),
        ],
    )
    def test_detect_stack(self, html: str, stack):
        assert detect_stack(html) == stack


class TestScoreSignals:
    def test_perfect_site(self):
        assert score_signals(_perfect_signals(), current_year=2026) == (100, [])

    def test_each_deduction(self):
        signals = _perfect_signals(
            https=False,
            has_viewport=False,
            title=None,
            has_meta_description=False,
            has_h1=False,
            has_lang=False,
            total_images=10,
            images_with_alt=7,
            has_email=False,
            has_phone=False,
            copyright_year=2023,
            response_time_ms=3500.0,
            stack_hint="joomla",
        )
        score, reasons = score_signals(signals, current_year=2026)

        # 100 - 20 - 15 - 5 - 5 - 5 - 5 - 10 - 10 - 10 - 10 - 3
        assert score == 2
        assert len(reasons) == 11
        assert "Only 7 of 10 images have alt text." in reasons
        assert "Contact info is hard to find (missing phone, email)." in reasons
        assert "Copyright notice is out of date (2023)." in reasons

    def test_single_missing_contact_signal_is_tolerated(self):
        score, _ = score_signals(_perfect_signals(has_address=False), current_year=2026)
        assert score == 100

    def test_recent_copyright_is_not_stale(self):
        score, _ = score_signals(_perfect_signals(copyright_year=2024), current_year=2026)
        assert score == 100

    def test_alt_coverage_threshold(self):
        score, _ = score_signals(_perfect_signals(total_images=5, images_with_alt=4), current_year=2026)
        assert score == 100

    def test_legacy_page_scores_poor(self):
        signals = extract_signals(LEGACY_PAGE, "http://church.example.org/")
        score, _ = score_signals(signals, current_year=2026)
        assert quality_from_score(score) is WebsiteQuality.poor


@pytest.mark.parametrize(
    "score, quality",
    [
        (100, WebsiteQuality.excellent),
        (85, WebsiteQuality.excellent),
        (84, WebsiteQuality.good),
        (65, WebsiteQuality.good),
        (64, WebsiteQuality.fair),
        (40, WebsiteQuality.fair),
        (39, WebsiteQuality.poor),
        (0, WebsiteQuality.poor),
    ],
)
def test_quality_from_score(score: int, quality: WebsiteQuality):
    assert quality_from_score(score) is quality
