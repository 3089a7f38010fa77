"""
Payment reconciliation endpoints.

Re-reads recent Stripe charges and books any payment a webhook missed.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from leadsync.core.models.io import StripeSyncCounts, StripeSyncRequest, StripeSyncResponse
from leadsync.reconciliation import PaymentSyncService
from leadsync.server.services.deps import ReposDep, StripeClientDep

router = APIRouter(tags=["payments"])


@router.post(
    "/stripe/sync",
    response_model=StripeSyncResponse,
    summary="Sync Stripe Payments",
    description="Match recent succeeded Stripe charges to invoices and record the missing payments.",
    response_description="Sync counters and per-charge errors.",
    responses={
        502: {"description": "Stripe API request failed"},
        503: {"description": "STRIPE_SECRET_KEY is not configured"},
    },
)
async def sync_stripe_payments(
    repos: ReposDep,
    stripe_client: StripeClientDep,
    request: Optional[StripeSyncRequest] = None,
) -> StripeSyncResponse:
    """
    Sync payments from Stripe.

    Running the sync again creates no new payments. Charges that cannot be
    matched to an invoice are reported in **errors** and do not stop the run.

    - **customer_id**: Optional Stripe customer to restrict the sync to.
    - **limit**: Number of recent charges to read (max 100).
    """
    request = request or StripeSyncRequest()
    service = PaymentSyncService(repos, stripe_client)
    result = await service.sync(customer_id=request.customer_id, limit=request.limit)
    return StripeSyncResponse(
        results=StripeSyncCounts(
            synced=result.synced, created=result.created, updated=result.updated, errors=result.errors
        ),
        message=result.message,
    )
