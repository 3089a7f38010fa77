"""
Stripe payment sync.

Re-reads recent Stripe charges and makes sure every successful charge is
booked as a completed payment against the right invoice. Running the sync
again books nothing new.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from leadsync.core.database import utc_now
from leadsync.core.database.entities import Invoice, Payment
from leadsync.core.database.repositories import RepoBundle
from leadsync.core.models.domain import InvoiceStatus, PaymentStatus
from leadsync.core.monitoring import log_sync_run
from leadsync.integrations.stripe import StripeClient

from .base import Clock, from_unix

logger = logging.getLogger(__name__)


class SyncResult(BaseModel):
    synced: int = 0
    created: int = 0
    updated: int = 0
    errors: List[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Synced {self.synced} payments, created {self.created}, updated {self.updated}"


class PaymentSyncService:
    def __init__(self, repos: RepoBundle, stripe_client: StripeClient, *, clock: Clock = utc_now) -> None:
        self.repos = repos
        self.stripe = stripe_client
        self.clock = clock

    async def sync(self, customer_id: Optional[str] = None, limit: int = 100) -> SyncResult:
        """Reconcile recent Stripe charges with local payments.

        Args:
            customer_id: Restrict to one Stripe customer
            limit: Number of charges to read

        Returns:
            Counters plus one error line per charge that could not be booked
        """
        charges = await self.stripe.list_charges(limit=limit, customer=customer_id)
        result = SyncResult()

        for charge in charges:
            charge_id = charge.get("id")
            try:
                async with self.repos.unit_of_work():
                    await self._sync_charge(charge, result)
            except Exception as e:
                logger.error("Error processing charge %s: %s", charge_id, e)
                result.errors.append(f"Error processing charge {charge_id}: {e}")

        log_sync_run(result.synced, result.created, result.updated, len(result.errors))
        logger.info("%s (%d errors)", result.message, len(result.errors))
        return result

    async def _sync_charge(self, charge: Dict[str, Any], result: SyncResult) -> None:
        if charge.get("status") != "succeeded" or charge.get("paid") is not True:
            return

        charge_id = charge["id"]
        payment_intent = charge.get("payment_intent")
        if not isinstance(payment_intent, str):
            payment_intent = None
        processed_at = from_unix(charge.get("created")) or self.clock()

        existing = await self.repos.payments.find_by_charge_or_intent(charge_id, payment_intent)
        if existing is not None:
            if existing.status != PaymentStatus.completed.value:
                existing.status = PaymentStatus.completed.value
                existing.processed_at = processed_at
                await self.repos.payments.update(existing)
                result.updated += 1
            result.synced += 1
            return

        amount = int(charge.get("amount") or 0)
        currency = (charge.get("currency") or "usd").upper()

        invoice = await self._find_invoice(charge, amount)
        if invoice is None:
            result.errors.append(f"No invoice found for charge {charge_id} ({amount / 100:.2f} {currency})")
            return

        await self.repos.payments.create(
            Payment(
                invoice_id=invoice.id,
                amount_cents=amount,
                status=PaymentStatus.completed.value,
                method="stripe",
                stripe_charge_id=charge_id,
                stripe_payment_id=payment_intent,
                processed_at=processed_at,
                currency=currency,
            )
        )
        if invoice.status != InvoiceStatus.paid.value:
            invoice.status = InvoiceStatus.paid.value
            invoice.paid_at = processed_at
            await self.repos.invoices.update(invoice)
        result.created += 1

    async def _find_invoice(self, charge: Dict[str, Any], amount: int) -> Optional[Invoice]:
        stripe_invoice_id = charge.get("invoice")
        if isinstance(stripe_invoice_id, str) and stripe_invoice_id:
            invoice = await self.repos.invoices.get_by_stripe_invoice_id(stripe_invoice_id)
            if invoice is not None:
                return invoice

        customer = charge.get("customer")
        if not isinstance(customer, str) or not customer:
            return None

        org = await self.repos.organizations.get_by_stripe_customer_id(customer)
        project = await self.repos.projects.get_by_stripe_customer_id(customer)
        if org is None and project is None:
            return None

        return await self.repos.invoices.find_open_for_customer(
            amount_cents=amount,
            organization_ids=[org.id] if org else [],
            project_ids=[project.id] if project else [],
        )
