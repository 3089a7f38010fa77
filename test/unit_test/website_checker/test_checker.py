"""Unit tests for the website checker."""

from __future__ import annotations

import httpx
import pytest

from leadsync.core.models.domain import WebsiteQuality
from leadsync.website_checker import WebsiteChecker, normalize_url

MODERN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Hope Center</title>
  <meta name="description" content="Housing and food support.">
</head>
<body>
  <h1>Hope Center</h1>
  <img src="/a.jpg" alt="Volunteers">
  <p>Call (502) 555-0100 or write to info@hope.org</p>
  <p>1200 Main Street, Louisville, KY</p>
  <footer>&copy; 2026 Hope Center</footer>
</body>
</html>"""

LEGACY_PAGE = """<html><body>
  <div class="weebly-header">Welcome</div>
  <img src="/a.gif"><img src="/b.gif">
  <p>Copyright 2016 Our Church</p>
</body></html>"""


@pytest.mark.parametrize(
    "raw, normalized",
    [
        ("hope.org", "https://hope.org"),
        ("  http://hope.org ", "http://hope.org"),
        ("https://hope.org/about", "https://hope.org/about"),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_url(raw, normalized):
    assert normalize_url(raw) == normalized


class TestWebsiteChecker:
    async def test_grades_reachable_site(self, website_checker: WebsiteChecker, website_server):
        website_server.add("GET", "/", text=MODERN_PAGE)

        result = await website_checker.check("https://mock-site.test/")

        assert result.reachable is True
        assert result.status_code == 200
        assert result.final_url == "https://mock-site.test/"
        assert result.quality is WebsiteQuality.excellent
        assert result.score >= 85
        assert result.response_time_ms is not None

    async def test_bare_host_gets_https(self, website_checker: WebsiteChecker, website_server):
        website_server.add("GET", "/", text=MODERN_PAGE)

        result = await website_checker.check("mock-site.test")

        assert result.url == "https://mock-site.test"
        assert str(website_server.requests[0].url).startswith("https://mock-site.test")

    async def test_follows_redirects(self, website_checker: WebsiteChecker, website_server):
        website_server.add(
            "GET",
            "/old",
            handler=lambda request: httpx.Response(301, headers={"Location": "http://mock-site.test/new"}),
        )
        website_server.add("GET", "/new", text=LEGACY_PAGE)

        result = await website_checker.check("https://mock-site.test/old")

        assert result.reachable is True
        assert result.final_url == "http://mock-site.test/new"
        assert result.quality is WebsiteQuality.poor
        assert "Site is not served over HTTPS." in result.reasons
        assert result.stack_hint == "weebly"

    async def test_error_status_is_unreachable(self, website_checker: WebsiteChecker, website_server):
        website_server.add("GET", "/", {"error": "down"}, status_code=503)

        result = await website_checker.check("https://mock-site.test/")

        assert result.reachable is False
        assert result.status_code == 503
        assert result.score == 0
        assert result.quality is WebsiteQuality.poor
        assert result.reasons == ["unreachable: HTTP 503"]

    async def test_transport_error_is_unreachable(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        checker = WebsiteChecker(client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)))
        try:
            result = await checker.check("https://mock-down.test")
        finally:
            await checker.aclose()

        assert result.reachable is False
        assert result.quality is WebsiteQuality.poor
        assert result.reasons == ["unreachable: ConnectError"]

    async def test_empty_url(self, website_checker: WebsiteChecker, website_server):
        result = await website_checker.check("")

        assert result.reachable is False
        assert result.reasons == ["unreachable: no url"]
        assert website_server.requests == []
