"""
Invoice and payment repositories.

This module provides the lookups used by Stripe webhook reconciliation and
by the payment sync: invoices by Stripe invoice id or by open amount for a
customer, and payments by charge or payment intent.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.core.models.domain import InvoiceStatus

from ..entities.invoices import Invoice, Payment
from .base import AsyncSQLModelRepository

OPEN_INVOICE_STATUSES = (InvoiceStatus.sent.value, InvoiceStatus.draft.value)


class InvoiceRepository(AsyncSQLModelRepository[Invoice]):
    """Repository for invoice data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Invoice)

    async def get_by_stripe_invoice_id(self, stripe_invoice_id: str) -> Optional[Invoice]:
        """Get invoice by its Stripe invoice id.

        Args:
            stripe_invoice_id: Stripe invoice identifier (``in_...``)

        Returns:
            Invoice instance or None
        """
        stmt = select(Invoice).where(Invoice.stripe_invoice_id == stripe_invoice_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def find_open_for_customer(
        self,
        *,
        amount_cents: int,
        organization_ids: List[str],
        project_ids: List[str],
    ) -> Optional[Invoice]:
        """Find the most recent SENT or DRAFT invoice for a customer with the given total.

        Args:
            amount_cents: Charged amount that must equal the invoice total
            organization_ids: Organizations owned by the Stripe customer
            project_ids: Projects owned by the Stripe customer

        Returns:
            The newest matching Invoice, or None
        """
        owners = []
        if organization_ids:
            owners.append(Invoice.organization_id.in_(organization_ids))  # type: ignore
        if project_ids:
            owners.append(Invoice.project_id.in_(project_ids))  # type: ignore
        if not owners:
            return None

        stmt = (
            select(Invoice)
            .where(or_(*owners))
            .where(Invoice.status.in_(OPEN_INVOICE_STATUSES))  # type: ignore
            .where(Invoice.total_cents == amount_cents)
            .order_by(Invoice.created_at.desc())  # type: ignore
        )
        result = await self.session.exec(stmt)
        return result.first()


class PaymentRepository(AsyncSQLModelRepository[Payment]):
    """Repository for payment data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Payment)

    async def get_by_charge_id(self, charge_id: str) -> Optional[Payment]:
        result = await self.session.exec(select(Payment).where(Payment.stripe_charge_id == charge_id))
        return result.first()

    async def find_by_charge_or_intent(self, charge_id: str, payment_intent: Optional[str]) -> Optional[Payment]:
        """Find a payment recorded for a Stripe charge.

        Args:
            charge_id: Stripe charge id
            payment_intent: Stripe payment intent id of the charge, if any

        Returns:
            Matching Payment instance or None
        """
        condition = Payment.stripe_charge_id == charge_id
        if payment_intent:
            condition = or_(condition, Payment.stripe_payment_id == payment_intent)
        result = await self.session.exec(select(Payment).where(condition))
        return result.first()

    async def list_for_invoice(self, invoice_id: str) -> List[Payment]:
        result = await self.session.exec(select(Payment).where(Payment.invoice_id == invoice_id))
        return list(result.all())
