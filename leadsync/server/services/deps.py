"""
Request Dependencies.

Provides the database session, the repository bundle, the integration
clients and the application services to API endpoints. Each provider is
exposed as an ``Annotated`` alias so tests can override it through
``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.core.database import get_session
from leadsync.core.database.repositories import RepoBundle, build_repos_from_session
from leadsync.email import EmailRateLimiter, Mailer
from leadsync.integrations.places import PlacesClient
from leadsync.integrations.resend import ResendClient
from leadsync.integrations.stripe import StripeClient
from leadsync.server.core.config import settings
from leadsync.services import DiscoveryService, LeadService
from leadsync.website_checker import WebsiteChecker

# Shared across requests so the per-recipient window survives between calls
email_rate_limiter = EmailRateLimiter()

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos_from_session(session)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]


async def get_places_client() -> AsyncGenerator[PlacesClient, None]:
    cfg = settings.google_places
    client = PlacesClient(
        cfg.api_key,
        places_base_url=cfg.places_base_url,
        geocode_base_url=cfg.geocode_base_url,
    )
    try:
        yield client
    finally:
        await client.aclose()


PlacesClientDep = Annotated[PlacesClient, Depends(get_places_client)]


async def get_stripe_client() -> AsyncGenerator[StripeClient, None]:
    cfg = settings.stripe
    client = StripeClient(cfg.secret_key, base_url=cfg.api_base_url)
    try:
        yield client
    finally:
        await client.aclose()


StripeClientDep = Annotated[StripeClient, Depends(get_stripe_client)]


async def get_mailer() -> AsyncGenerator[Mailer, None]:
    cfg = settings.resend
    client = ResendClient(
        cfg.api_key,
        from_email=cfg.from_email,
        from_name=cfg.from_name,
        base_url=cfg.api_base_url,
    )
    try:
        yield Mailer(client, email_rate_limiter, site_url=cfg.site_url)
    finally:
        await client.aclose()


MailerDep = Annotated[Mailer, Depends(get_mailer)]


async def get_website_checker() -> AsyncGenerator[WebsiteChecker, None]:
    checker = WebsiteChecker()
    try:
        yield checker
    finally:
        await checker.aclose()


WebsiteCheckerDep = Annotated[WebsiteChecker, Depends(get_website_checker)]


def get_lead_service(repos: ReposDep) -> LeadService:
    return LeadService(repos.leads)


LeadServiceDep = Annotated[LeadService, Depends(get_lead_service)]


def get_discovery_service(
    repos: ReposDep, places: PlacesClientDep, checker: WebsiteCheckerDep
) -> DiscoveryService:
    return DiscoveryService(places, repos.leads, website_checker=checker)


DiscoveryServiceDep = Annotated[DiscoveryService, Depends(get_discovery_service)]
