"""Donation repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.donations import Donation
from .base import AsyncSQLModelRepository


class DonationRepository(AsyncSQLModelRepository[Donation]):
    """Repository for donations reconciled from Square webhooks."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Donation)

    async def get_by_square_payment_id(self, payment_id: str) -> Optional[Donation]:
        result = await self.session.exec(select(Donation).where(Donation.square_payment_id == payment_id))
        return result.first()

    async def get_by_square_subscription_id(self, subscription_id: str) -> Optional[Donation]:
        stmt = select(Donation).where(Donation.square_subscription_id == subscription_id)
        result = await self.session.exec(stmt)
        return result.first()
