"""
Organization and project repositories.

Both are looked up by Stripe customer id when a charge has to be matched to
an open invoice, and projects are also looked up by subscription id when a
maintenance subscription changes.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.organizations import Organization, Project
from .base import AsyncSQLModelRepository


class OrganizationRepository(AsyncSQLModelRepository[Organization]):
    """Repository for client organizations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Organization)

    async def get_by_stripe_customer_id(self, customer_id: str) -> Optional[Organization]:
        stmt = select(Organization).where(Organization.stripe_customer_id == customer_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        result = await self.session.exec(select(Organization).where(Organization.slug == slug))
        return result.first()


class ProjectRepository(AsyncSQLModelRepository[Project]):
    """Repository for client projects."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)

    async def get_by_stripe_customer_id(self, customer_id: str) -> Optional[Project]:
        stmt = select(Project).where(Project.stripe_customer_id == customer_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_subscription_id(self, subscription_id: str) -> Optional[Project]:
        """Get the project that owns a Stripe subscription.

        Args:
            subscription_id: Stripe subscription identifier

        Returns:
            Project instance or None
        """
        stmt = select(Project).where(Project.stripe_subscription_id == subscription_id)
        result = await self.session.exec(stmt)
        return result.first()
