"""
Stripe event reconciliation.

Projects Stripe invoice, checkout and subscription events onto local
invoices, payments and project maintenance plans.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional

from leadsync.core.database.entities import Invoice, Payment, Project
from leadsync.core.models.domain import InvoiceStatus, MaintenanceStatus, PaymentStatus, WebhookProvider

from .base import WebhookReconciler, from_unix
from .outcome import WebhookOutcome

Handler = Callable[[Dict[str, Any]], Awaitable[WebhookOutcome]]


def _object(event: Dict[str, Any]) -> Dict[str, Any]:
    return ((event.get("data") or {}).get("object")) or {}


class StripeWebhookReconciler(WebhookReconciler):
    provider = WebhookProvider.stripe.value

    async def dispatch(self, event_type: str, event: Dict[str, Any]) -> WebhookOutcome:
        handlers: Dict[str, Handler] = {
            "checkout.session.completed": self.on_checkout_session_completed,
            "invoice.paid": self.on_invoice_paid,
            "invoice.payment_failed": self.on_invoice_payment_failed,
            "invoice.finalized": self.on_invoice_finalized,
            "invoice.voided": self.on_invoice_voided,
            "customer.subscription.created": self.on_subscription_created,
            "customer.subscription.updated": self.on_subscription_updated,
            "customer.subscription.deleted": self.on_subscription_deleted,
        }
        handler = handlers.get(event_type)
        if handler is None:
            return WebhookOutcome.ignored(f"Unhandled event type {event_type}")
        return await handler(_object(event))

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    async def _invoice_for(self, stripe_invoice: Dict[str, Any]) -> Optional[Invoice]:
        stripe_invoice_id = stripe_invoice.get("id")
        if not stripe_invoice_id:
            return None
        return await self.repos.invoices.get_by_stripe_invoice_id(stripe_invoice_id)

    async def on_checkout_session_completed(self, session: Dict[str, Any]) -> WebhookOutcome:
        invoice_id = (session.get("metadata") or {}).get("invoiceId")
        if not invoice_id:
            return WebhookOutcome.ignored(f"No invoice ID found in checkout session {session.get('id')}")

        invoice = await self.repos.invoices.get_by_id(invoice_id)
        if invoice is None:
            return WebhookOutcome.ignored(f"Invoice not found: {invoice_id}")

        if session.get("payment_status") != "paid":
            return WebhookOutcome.processed(f"Checkout session {session.get('id')} not paid yet")
        if invoice.status == InvoiceStatus.paid.value:
            return WebhookOutcome.processed(f"Invoice {invoice.number} already paid")

        invoice.status = InvoiceStatus.paid.value
        invoice.paid_at = self.clock()
        await self.repos.invoices.update(invoice)
        return WebhookOutcome.processed(f"Invoice {invoice.number} marked as paid via checkout session")

    async def on_invoice_paid(self, stripe_invoice: Dict[str, Any]) -> WebhookOutcome:
        invoice = await self._invoice_for(stripe_invoice)
        if invoice is None:
            return WebhookOutcome.ignored(f"Invoice not found for Stripe invoice {stripe_invoice.get('id')}")

        if invoice.status != InvoiceStatus.paid.value:
            paid_at = from_unix((stripe_invoice.get("status_transitions") or {}).get("paid_at"))
            invoice.status = InvoiceStatus.paid.value
            invoice.paid_at = paid_at or self.clock()
            await self.repos.invoices.update(invoice)

        charge = stripe_invoice.get("charge")
        if isinstance(charge, str) and charge:
            if await self.repos.payments.get_by_charge_id(charge) is None:
                payment_intent = stripe_invoice.get("payment_intent")
                await self.repos.payments.create(
                    Payment(
                        invoice_id=invoice.id,
                        amount_cents=int(stripe_invoice.get("amount_paid") or 0),
                        status=PaymentStatus.completed.value,
                        method="stripe",
                        stripe_charge_id=charge,
                        stripe_payment_id=payment_intent if isinstance(payment_intent, str) else None,
                        processed_at=self.clock(),
                        currency=(stripe_invoice.get("currency") or "usd").upper(),
                    )
                )
        return WebhookOutcome.processed(f"Invoice {invoice.number} marked as paid")

    async def on_invoice_payment_failed(self, stripe_invoice: Dict[str, Any]) -> WebhookOutcome:
        invoice = await self._invoice_for(stripe_invoice)
        if invoice is None:
            return WebhookOutcome.ignored(f"Invoice not found for Stripe invoice {stripe_invoice.get('id')}")

        is_past_due = invoice.due_date is not None and invoice.due_date < self.clock()
        if is_past_due and invoice.status not in (InvoiceStatus.paid.value, InvoiceStatus.overdue.value):
            invoice.status = InvoiceStatus.overdue.value
            await self.repos.invoices.update(invoice)
            return WebhookOutcome.processed(f"Invoice {invoice.number} payment failed, now overdue")
        return WebhookOutcome.processed(f"Invoice {invoice.number} payment failed")

    async def on_invoice_finalized(self, stripe_invoice: Dict[str, Any]) -> WebhookOutcome:
        invoice = await self._invoice_for(stripe_invoice)
        if invoice is None:
            return WebhookOutcome.ignored(f"Invoice not found for Stripe invoice {stripe_invoice.get('id')}")

        if invoice.status in (InvoiceStatus.paid.value, InvoiceStatus.sent.value):
            return WebhookOutcome.processed(f"Invoice {invoice.number} already {invoice.status}")

        invoice.status = InvoiceStatus.sent.value
        invoice.sent_at = self.clock()
        await self.repos.invoices.update(invoice)
        return WebhookOutcome.processed(f"Invoice {invoice.number} finalized")

    async def on_invoice_voided(self, stripe_invoice: Dict[str, Any]) -> WebhookOutcome:
        invoice = await self._invoice_for(stripe_invoice)
        if invoice is None:
            return WebhookOutcome.ignored(f"Invoice not found for Stripe invoice {stripe_invoice.get('id')}")

        if invoice.status != InvoiceStatus.cancelled.value:
            invoice.status = InvoiceStatus.cancelled.value
            await self.repos.invoices.update(invoice)
        return WebhookOutcome.processed(f"Invoice {invoice.number} voided")

    # ------------------------------------------------------------------
    # Maintenance subscriptions
    # ------------------------------------------------------------------

    @staticmethod
    def _maintenance_status(subscription: Dict[str, Any]) -> str:
        if subscription.get("status") == "active":
            return MaintenanceStatus.active.value
        return MaintenanceStatus.inactive.value

    async def _apply_subscription(self, project: Project, subscription: Dict[str, Any]) -> None:
        project.maintenance_status = self._maintenance_status(subscription)
        next_billing = from_unix(subscription.get("current_period_end"))
        if next_billing is not None:
            project.next_billing_date = next_billing
        await self.repos.projects.update(project)

    async def on_subscription_created(self, subscription: Dict[str, Any]) -> WebhookOutcome:
        project_id = (subscription.get("metadata") or {}).get("projectId")
        if not project_id:
            return WebhookOutcome.ignored("No project ID in subscription metadata")

        project = await self.repos.projects.get_by_id(project_id)
        if project is None:
            return WebhookOutcome.ignored(f"Project not found: {project_id}")

        project.stripe_subscription_id = subscription.get("id")
        await self._apply_subscription(project, subscription)
        return WebhookOutcome.processed(f"Subscription {subscription.get('id')} created for project {project.id}")

    async def on_subscription_updated(self, subscription: Dict[str, Any]) -> WebhookOutcome:
        project = await self.repos.projects.get_by_subscription_id(subscription.get("id") or "")
        if project is None:
            return WebhookOutcome.ignored(f"Project not found for subscription {subscription.get('id')}")

        await self._apply_subscription(project, subscription)
        return WebhookOutcome.processed(f"Subscription {subscription.get('id')} updated")

    async def on_subscription_deleted(self, subscription: Dict[str, Any]) -> WebhookOutcome:
        project = await self.repos.projects.get_by_subscription_id(subscription.get("id") or "")
        if project is None:
            return WebhookOutcome.ignored(f"Project not found for subscription {subscription.get('id')}")

        project.maintenance_status = MaintenanceStatus.cancelled.value
        project.stripe_subscription_id = None
        await self.repos.projects.update(project)
        return WebhookOutcome.processed(f"Subscription {subscription.get('id')} deleted")
