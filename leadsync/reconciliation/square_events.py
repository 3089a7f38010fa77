"""
Square event reconciliation.

Updates donations from Square payment, invoice and subscription events and
sends the donor a thank-you email the first time a donation completes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from leadsync.core.database import utc_now
from leadsync.core.database.entities import Donation
from leadsync.core.database.repositories import RepoBundle
from leadsync.core.models.domain import DonationStatus, WebhookProvider
from leadsync.email import Mailer, render_donation_thank_you
from leadsync.integrations.resend import EmailMessage

from .base import Clock, WebhookReconciler
from .outcome import WebhookOutcome

PAYMENT_STATUS_MAP = {
    "COMPLETED": DonationStatus.completed.value,
    "APPROVED": DonationStatus.completed.value,
    "PENDING": DonationStatus.pending.value,
    "CANCELED": DonationStatus.failed.value,
    "FAILED": DonationStatus.failed.value,
}

INVOICE_STATUS_MAP = {
    "PAID": DonationStatus.completed.value,
    "PAYMENT_PENDING": DonationStatus.pending.value,
    "OVERDUE": DonationStatus.failed.value,
    "CANCELED": DonationStatus.failed.value,
}

DONATION_ID_FIELD = "Donation ID"


def _object(event: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    return (((event.get("data") or {}).get("object")) or {}).get(key)


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class SquareWebhookReconciler(WebhookReconciler):
    provider = WebhookProvider.square.value

    def __init__(self, repos: RepoBundle, *, mailer: Optional[Mailer] = None, clock: Clock = utc_now) -> None:
        super().__init__(repos, clock=clock)
        self.mailer = mailer

    def event_id(self, event: Dict[str, Any]) -> Optional[str]:
        return event.get("event_id") or event.get("id")

    async def dispatch(self, event_type: str, event: Dict[str, Any]) -> WebhookOutcome:
        if event_type in ("payment.created", "payment.completed", "payment.updated"):
            return await self.on_payment(_object(event, "payment"))
        if event_type in ("invoice.payment_pending", "invoice.payment_received"):
            return await self.on_invoice(_object(event, "invoice"))
        if event_type in ("subscription.created", "subscription.updated"):
            return await self.on_subscription(_object(event, "subscription"))
        if event_type == "subscription.deleted":
            return await self.on_subscription_deleted(_object(event, "subscription"))
        return WebhookOutcome.ignored(f"Unhandled event type {event_type}")

    async def _set_status(self, donation: Donation, status: str) -> None:
        previous = donation.status
        donation.status = status
        if status == DonationStatus.cancelled.value:
            donation.cancelled_at = self.clock()
        await self.repos.donations.update(donation)
        if status == DonationStatus.completed.value and previous != status:
            await self._send_thank_you(donation)

    async def _send_thank_you(self, donation: Donation) -> None:
        if self.mailer is None or donation.thank_you_sent_at is not None:
            return
        try:
            rendered = render_donation_thank_you(donation, brand=self.mailer.brand, site_url=self.mailer.site_url)
            result = await self.mailer.send(
                EmailMessage(to=donation.donor_email, subject=rendered.subject, html=rendered.html, text=rendered.text)
            )
        except Exception as e:
            self._logger.error("Failed to send thank-you email for donation %s: %s", donation.id, e)
            return
        if not result.success:
            self._logger.error("Thank-you email for donation %s failed: %s", donation.id, result.error)
            return
        donation.thank_you_sent_at = self.clock()
        await self.repos.donations.update(donation)

    async def on_payment(self, payment: Optional[Dict[str, Any]]) -> WebhookOutcome:
        if not payment:
            return WebhookOutcome.ignored("No payment data in event")

        donation = await self.repos.donations.get_by_square_payment_id(payment.get("id") or "")
        if donation is None:
            return WebhookOutcome.ignored(f"No donation found for payment {payment.get('id')}")

        new_status = PAYMENT_STATUS_MAP.get(payment.get("status") or "")
        if new_status is None or new_status == donation.status:
            return WebhookOutcome.processed(f"Donation {donation.id} unchanged ({donation.status})")

        await self._set_status(donation, new_status)
        return WebhookOutcome.processed(f"Donation {donation.id} updated to {new_status}")

    async def on_invoice(self, invoice: Optional[Dict[str, Any]]) -> WebhookOutcome:
        if not invoice:
            return WebhookOutcome.ignored("No invoice data in event")

        donation_id = next(
            (f.get("value") for f in invoice.get("custom_fields") or [] if f.get("label") == DONATION_ID_FIELD),
            None,
        )
        if not donation_id:
            return WebhookOutcome.ignored("No donation ID found in invoice")

        donation = await self.repos.donations.get_by_id(donation_id)
        if donation is None:
            return WebhookOutcome.ignored(f"No donation found for invoice {donation_id}")

        new_status = INVOICE_STATUS_MAP.get(invoice.get("status") or "")
        if new_status is None or new_status == donation.status:
            return WebhookOutcome.processed(f"Donation {donation.id} unchanged ({donation.status})")

        await self._set_status(donation, new_status)
        return WebhookOutcome.processed(f"Donation {donation.id} updated from invoice to {new_status}")

    async def on_subscription(self, subscription: Optional[Dict[str, Any]]) -> WebhookOutcome:
        if not subscription:
            return WebhookOutcome.ignored("No subscription data in event")

        donation = await self.repos.donations.get_by_square_subscription_id(subscription.get("id") or "")
        if donation is None:
            return WebhookOutcome.ignored(f"No donation found for subscription {subscription.get('id')}")

        renewal = _parse_date(subscription.get("billing_anchor_date"))
        if renewal is not None:
            donation.next_renewal_date = renewal

        status = subscription.get("status")
        if status == "ACTIVE" and donation.status != DonationStatus.completed.value:
            await self._set_status(donation, DonationStatus.completed.value)
        elif status == "CANCELED" and donation.status != DonationStatus.cancelled.value:
            await self._set_status(donation, DonationStatus.cancelled.value)
        elif renewal is not None:
            await self.repos.donations.update(donation)
        return WebhookOutcome.processed(f"Recurring donation {donation.id} updated")

    async def on_subscription_deleted(self, subscription: Optional[Dict[str, Any]]) -> WebhookOutcome:
        if not subscription:
            return WebhookOutcome.ignored("No subscription data in cancellation event")

        donation = await self.repos.donations.get_by_square_subscription_id(subscription.get("id") or "")
        if donation is None:
            return WebhookOutcome.ignored(f"No donation found for subscription cancellation {subscription.get('id')}")

        if donation.status != DonationStatus.cancelled.value:
            await self._set_status(donation, DonationStatus.cancelled.value)
        return WebhookOutcome.processed(f"Subscription cancelled for donation {donation.id}")
