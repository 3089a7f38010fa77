"""
Payment provider webhook endpoints.

Stripe and Square post signed events here. The raw body is verified
before it is parsed, then handed to the provider's reconciler, which
applies it exactly once.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, status

from leadsync.core.logging_config import get_logger
from leadsync.core.models.io import WebhookAck
from leadsync.reconciliation import (
    SquareWebhookReconciler,
    StripeWebhookReconciler,
    WebhookPayloadError,
    WebhookSignatureError,
    parse_event,
    verify_square_signature,
    verify_stripe_signature,
)
from leadsync.server.core.config import settings
from leadsync.server.services.deps import MailerDep, ReposDep

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post(
    "/stripe",
    response_model=WebhookAck,
    summary="Stripe Webhook",
    description="Receive a signed Stripe event and reconcile invoices, payments and subscriptions.",
    response_description="Acknowledgement with the handling status.",
    responses={
        400: {"description": "Missing or invalid signature, or malformed event"},
        500: {"description": "Webhook secret not configured, or the event could not be processed"},
    },
)
async def stripe_webhook(
    request: Request,
    repos: ReposDep,
    stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
) -> WebhookAck:
    """
    Handle a Stripe webhook.

    Redelivered events are acknowledged without changing anything. A failure
    while applying the event returns 500 so that Stripe retries it.
    """
    body = await request.body()

    if not stripe_signature:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No signature provided")

    cfg = settings.stripe
    if not cfg.webhook_secret:
        logger.error("STRIPE_WEBHOOK_SECRET is not set")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook secret not configured")

    try:
        event = verify_stripe_signature(
            body, stripe_signature, cfg.webhook_secret, tolerance=cfg.webhook_tolerance_seconds
        )
    except (WebhookSignatureError, WebhookPayloadError) as e:
        logger.warning(f"Stripe webhook rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Webhook Error: {e}") from e

    reconciler = StripeWebhookReconciler(repos)
    try:
        outcome = await reconciler.handle(event)
    except WebhookPayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Webhook Error: {e}") from e
    except Exception as e:
        logger.error(f"Stripe webhook processing failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook processing failed"
        ) from e

    return WebhookAck(status=outcome.status.value)


@router.post(
    "/square",
    response_model=WebhookAck,
    summary="Square Webhook",
    description="Receive a signed Square event and reconcile donations.",
    response_description="Acknowledgement with the handling status.",
    responses={
        400: {"description": "Malformed event"},
        401: {"description": "Invalid webhook signature"},
        500: {"description": "The event could not be processed"},
    },
)
async def square_webhook(
    request: Request,
    repos: ReposDep,
    mailer: MailerDep,
    square_signature: Optional[str] = Header(default=None, alias="x-square-hmac-sha256-signature"),
) -> WebhookAck:
    """
    Handle a Square webhook.

    A donation that becomes COMPLETED gets a thank-you email; a failed email
    does not fail the webhook.
    """
    body = await request.body()
    cfg = settings.square

    if not verify_square_signature(body, square_signature, cfg.signature_key, cfg.notification_url):
        logger.warning("Square webhook rejected: invalid signature")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook signature")

    try:
        event = parse_event(body)
    except WebhookPayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    reconciler = SquareWebhookReconciler(repos, mailer=mailer)
    try:
        outcome = await reconciler.handle(event)
    except WebhookPayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Square webhook processing failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process webhook"
        ) from e

    return WebhookAck(status=outcome.status.value)
