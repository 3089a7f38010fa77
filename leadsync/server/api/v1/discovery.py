"""
Lead discovery endpoints.

Searches Google Places for prospects and saves the promising ones as leads.
"""

from __future__ import annotations

from fastapi import APIRouter

from leadsync.core.logging_config import get_logger
from leadsync.core.models.io import DiscoveryRequest, DiscoveryResult
from leadsync.server.services.deps import DiscoveryServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["discovery"])


@router.post(
    "/places",
    response_model=DiscoveryResult,
    summary="Discover Leads from Google Places",
    description="Search Google Places around a location, score the results and save new prospects as leads.",
    response_description="Discovery counters and the prospect rows.",
    responses={
        502: {"description": "Google Places or Geocoding request failed"},
        503: {"description": "GOOGLE_MAPS_API_KEY is not configured"},
    },
)
async def discover_places(request: DiscoveryRequest, service: DiscoveryServiceDep) -> DiscoveryResult:
    """
    Discover leads.

    Places without a website are listed first, since they are the best
    prospects for a web agency. At most 20 places are scored per run.

    - **location**: Free-form location, default "Louisville, KY".
    - **radius**: Meters, clamped to 50000.
    - **type** / **keyword**: Narrow the search; also used as the lead category.
    - **save**: When false, prospects are returned without scoring or saving.
    - **check_websites**: Grade each website before scoring.
    - **min_score**: Places scoring below this are skipped.
    - **filters**: Website, rating and review filters.
    """
    result = await service.discover(request)
    logger.info(
        f"Discovery finished: found={result.total_found} filtered={result.filtered} "
        f"saved={result.saved} existing={result.skipped_existing} low_score={result.skipped_low_score}"
    )
    return result
