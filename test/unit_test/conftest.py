"""Shared fixtures for unit tests.

Provides an in-memory SQLite database, repositories bound to it, fake
upstream APIs served through ``httpx.MockTransport`` and an ASGI client
with every outbound dependency overridden.
"""

from __future__ import annotations

import json
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.pool import StaticPool

from leadsync.core.database import create_all, create_sessionmaker
from leadsync.core.database.repositories import RepoBundle, build_repos_from_session
from leadsync.email import EmailRateLimiter, Mailer
from leadsync.integrations.places import PlacesClient
from leadsync.integrations.resend import ResendClient
from leadsync.integrations.stripe import StripeClient
from leadsync.scoring import ScoringProfile
from leadsync.website_checker import WebsiteChecker

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PLACES_BASE_URL = "http://mock-places"
GEOCODE_BASE_URL = "http://mock-geocode"
STRIPE_BASE_URL = "http://mock-stripe"
RESEND_BASE_URL = "http://mock-resend"


class FakeUpstream:
    """Minimal fake HTTP API for ``httpx.MockTransport``.

    Routes are keyed by (method, path). Every request is recorded; unknown
    routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status_code: int = 200,
        *,
        text: Optional[str] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> None:
        if handler is None:
            if text is not None:

                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(status_code, text=text, headers={"Content-Type": "text/html"})

            else:

                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(status_code, json=json_body)

        self.routes[(method.upper(), path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), **kwargs)

    def json_bodies(self, path: str) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.url.path == path and r.content]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session_maker = create_sessionmaker(test_engine)
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos_from_session(session)


@pytest.fixture
def profile() -> ScoringProfile:
    """Louisville, KY scoring profile independent of the environment."""
    return ScoringProfile()


# ---------------------------------------------------------------------------
# Fake upstream APIs
# ---------------------------------------------------------------------------


@pytest.fixture
def google_api() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def stripe_api() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def resend_api() -> FakeUpstream:
    api = FakeUpstream()
    api.add("POST", "/emails", {"id": "email_123"})
    return api


@pytest.fixture
def website_server() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def places_client(google_api: FakeUpstream) -> AsyncGenerator[PlacesClient, None]:
    client = PlacesClient(
        "test-google-key",
        client=google_api.client(),
        places_base_url=PLACES_BASE_URL,
        geocode_base_url=GEOCODE_BASE_URL,
    )
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def stripe_client(stripe_api: FakeUpstream) -> AsyncGenerator[StripeClient, None]:
    client = StripeClient("sk_test_123", client=stripe_api.client(), base_url=STRIPE_BASE_URL)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def resend_client(resend_api: FakeUpstream) -> AsyncGenerator[ResendClient, None]:
    client = ResendClient(
        "re_test_123",
        from_email="hello@agency.test",
        from_name="Agency",
        client=resend_api.client(),
        base_url=RESEND_BASE_URL,
    )
    yield client
    await client.aclose()


@pytest.fixture
def mailer(resend_client: ResendClient) -> Mailer:
    return Mailer(resend_client, EmailRateLimiter(), site_url="https://agency.test")


@pytest_asyncio.fixture
async def website_checker(website_server: FakeUpstream) -> AsyncGenerator[WebsiteChecker, None]:
    checker = WebsiteChecker(client=website_server.client(follow_redirects=True))
    yield checker
    await checker.aclose()


# ---------------------------------------------------------------------------
# ASGI client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession,
    places_client: PlacesClient,
    stripe_client: StripeClient,
    mailer: Mailer,
    website_checker: WebsiteChecker,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with every external dependency overridden."""
    from leadsync.core.database import get_session
    from leadsync.server.main import app
    from leadsync.server.services import deps

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[deps.get_places_client] = lambda: places_client
    app.dependency_overrides[deps.get_stripe_client] = lambda: stripe_client
    app.dependency_overrides[deps.get_mailer] = lambda: mailer
    app.dependency_overrides[deps.get_website_checker] = lambda: website_checker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
