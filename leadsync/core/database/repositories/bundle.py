"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
for easy dependency injection in services and application components.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncContextManager

from sqlmodel.ext.asyncio.session import AsyncSession

from .base import unit_of_work
from .donations import DonationRepository
from .invoices import InvoiceRepository, PaymentRepository
from .leads import LeadRepository
from .organizations import OrganizationRepository, ProjectRepository
from .webhook_logs import WebhookLogRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    leads: LeadRepository
    organizations: OrganizationRepository
    projects: ProjectRepository
    invoices: InvoiceRepository
    payments: PaymentRepository
    donations: DonationRepository
    webhook_logs: WebhookLogRepository

    def unit_of_work(self) -> AsyncContextManager[AsyncSession]:
        """Apply the writes of all repositories in one transaction."""
        return unit_of_work(self.session)


def build_repos_from_session(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        leads=LeadRepository(session),
        organizations=OrganizationRepository(session),
        projects=ProjectRepository(session),
        invoices=InvoiceRepository(session),
        payments=PaymentRepository(session),
        donations=DonationRepository(session),
        webhook_logs=WebhookLogRepository(session),
    )
