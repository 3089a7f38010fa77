"""
Payment reconciliation.

Verifies provider webhooks, applies them idempotently and re-reads Stripe
charges to catch anything a webhook missed.
"""

from .base import WebhookReconciler, from_unix
from .errors import WebhookError, WebhookPayloadError, WebhookSignatureError
from .outcome import WebhookOutcome
from .payment_sync import PaymentSyncService, SyncResult
from .signatures import (
    compute_square_signature,
    compute_stripe_signature,
    parse_event,
    verify_square_signature,
    verify_stripe_signature,
)
from .square_events import SquareWebhookReconciler
from .stripe_events import StripeWebhookReconciler

__all__ = [
    "PaymentSyncService",
    "SquareWebhookReconciler",
    "StripeWebhookReconciler",
    "SyncResult",
    "WebhookError",
    "WebhookOutcome",
    "WebhookPayloadError",
    "WebhookReconciler",
    "WebhookSignatureError",
    "compute_square_signature",
    "compute_stripe_signature",
    "from_unix",
    "parse_event",
    "verify_square_signature",
    "verify_stripe_signature",
]
