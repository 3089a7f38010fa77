"""
Lead discovery through Google Places.

Searches Places around a location, filters the results, scores the best
matches with the lead scoring engine and stores the promising ones as
leads tagged for follow-up.
"""

from __future__ import annotations

import asyncio
import re
from typing import Dict, List, Optional, Tuple

from leadsync.core.database.entities import Lead
from leadsync.core.database.repositories import LeadRepository, unit_of_work
from leadsync.core.logging_config import get_logger
from leadsync.core.models.domain import LeadSource
from leadsync.core.models.io import DiscoveredProspect, DiscoveryRequest, DiscoveryResult
from leadsync.core.models.io.discovery import MAX_ANALYZED_PLACES
from leadsync.integrations.places import (
    PlaceDetails,
    PlacesClient,
    PlaceSearchParams,
    filter_places,
    parse_us_address,
)
from leadsync.scoring import LeadForScoring, ScoringProfile, calculate_lead_score, get_score_tier
from leadsync.website_checker import WebsiteChecker, WebsiteCheckResult

logger = get_logger(__name__)

MAX_CONCURRENT_WEBSITE_CHECKS = 3


def slugify(value: str) -> str:
    return re.sub(r"\s+", "-", value.strip().lower())


def discovery_tags(score: int, category: Optional[str], has_website: bool) -> List[str]:
    """Tags stored on a discovered lead: score bucket, tier, category and website flag."""
    tags = [f"score-{(score // 10) * 10}", get_score_tier(score).value.lower()]
    if category:
        tags.append(slugify(category))
    tags.append("has-website" if has_website else "no-website")
    return tags


def _category_for(request: DiscoveryRequest, place: PlaceDetails) -> Optional[str]:
    if request.keyword:
        return request.keyword
    if request.type:
        return request.type
    if place.types:
        return place.types[0].replace("_", " ")
    return None


class DiscoveryService:
    """Find, score and save prospects from Google Places.

    Args:
        places: Places API client
        leads: Lead repository used for duplicate checks and saving
        website_checker: Used when a request asks for website checks
        profile: Scoring profile; the settings-derived default when omitted
    """

    def __init__(
        self,
        places: PlacesClient,
        leads: LeadRepository,
        *,
        website_checker: Optional[WebsiteChecker] = None,
        profile: Optional[ScoringProfile] = None,
    ) -> None:
        self.places = places
        self.leads = leads
        self.website_checker = website_checker
        self.profile = profile

    async def discover(self, request: DiscoveryRequest) -> DiscoveryResult:
        logger.info(
            f"Starting Places discovery: location={request.location!r} radius={request.radius} "
            f"type={request.type!r} keyword={request.keyword!r}"
        )
        all_places = await self.places.search_places(
            PlaceSearchParams(
                location=request.location,
                radius=request.radius,
                type=request.type,
                keyword=request.keyword,
            )
        )
        filtered = filter_places(
            all_places,
            has_website=request.filters.has_website,
            min_rating=request.filters.min_rating,
            min_reviews=request.filters.min_reviews,
            prioritize_no_website=True,
        )
        logger.info(f"Places discovery found {len(all_places)} places, {len(filtered)} passed filters")

        if not filtered:
            return DiscoveryResult(message="No places found matching criteria", total_found=len(all_places))

        if not request.save:
            return DiscoveryResult(
                total_found=len(all_places),
                filtered=len(filtered),
                prospects=[self._prospect(place) for place in filtered],
            )

        to_analyze = filtered[:MAX_ANALYZED_PLACES]
        result = DiscoveryResult(total_found=len(all_places), filtered=len(filtered), analyzed=len(to_analyze))
        checks = await self._check_websites(to_analyze) if request.check_websites else {}

        for place in to_analyze:
            category = _category_for(request, place)
            city, state, zip_code = parse_us_address(place.address)
            check = checks.get(place.place_id)
            website_quality = check.quality.value if check is not None else None
            website_score = check.score if check is not None else None

            score = calculate_lead_score(
                LeadForScoring(
                    has_website=bool(place.website),
                    website_quality=website_quality,
                    category=category,
                    city=city,
                    state=state,
                    phone=place.phone,
                ),
                self.profile,
            )
            if score < request.min_score:
                logger.debug(f"Skipping {place.name} (score: {score})")
                result.skipped_low_score += 1
                continue

            existing = await self._find_existing(place)
            if existing is not None:
                logger.debug(f"Lead already exists: {place.name}")
                result.skipped_existing += 1
                result.prospects.append(
                    self._prospect(place, lead_id=existing.id, score=score, category=category, status="existing")
                )
                continue

            lead = Lead(
                name=place.name,
                company=place.name,
                phone=place.phone,
                website_url=place.website,
                has_website=bool(place.website),
                website_quality=website_quality,
                website_score=website_score,
                category=category,
                address=place.address,
                city=city or None,
                state=state or None,
                zip_code=zip_code or None,
                latitude=place.geometry.lat if place.geometry else None,
                longitude=place.geometry.lng if place.geometry else None,
                source=LeadSource.google_places.value,
                google_place_id=place.place_id,
                rating=place.rating,
                total_ratings=place.total_ratings,
                lead_score=score,
            )
            lead.set_tags_list(discovery_tags(score, category, bool(place.website)))
            try:
                async with unit_of_work(self.leads.session):
                    lead = await self.leads.create(lead)
            except Exception as e:
                logger.error(f"Failed to save lead {place.name}: {e}")
                result.errors.append(f"Error saving {place.name}: {e}")
                continue

            result.saved += 1
            result.prospects.append(
                self._prospect(
                    place,
                    lead_id=lead.id,
                    score=score,
                    category=category,
                    website_quality=website_quality,
                    status="new",
                )
            )
            logger.info(f"Saved lead {place.name} (score: {score})")

        return result

    async def _find_existing(self, place: PlaceDetails) -> Optional[Lead]:
        if place.place_id:
            existing = await self.leads.get_by_place_id(place.place_id)
            if existing is not None:
                return existing
        return await self.leads.find_existing_by_name(place.name)

    async def _check_websites(self, places: List[PlaceDetails]) -> Dict[str, WebsiteCheckResult]:
        """Grade the websites of ``places``, a few at a time."""
        if self.website_checker is None:
            return {}
        checker = self.website_checker
        semaphore = asyncio.Semaphore(MAX_CONCURRENT_WEBSITE_CHECKS)

        async def check(place: PlaceDetails) -> Tuple[str, WebsiteCheckResult]:
            async with semaphore:
                return place.place_id, await checker.check(place.website or "")

        results = await asyncio.gather(*(check(place) for place in places if place.website))
        return dict(results)

    @staticmethod
    def _prospect(
        place: PlaceDetails,
        *,
        lead_id: Optional[str] = None,
        score: Optional[int] = None,
        category: Optional[str] = None,
        website_quality: Optional[str] = None,
        status: Optional[str] = None,
    ) -> DiscoveredProspect:
        return DiscoveredProspect(
            id=lead_id,
            place_id=place.place_id,
            name=place.name,
            address=place.address,
            phone=place.phone,
            website=place.website,
            rating=place.rating,
            total_ratings=place.total_ratings,
            lead_score=score,
            tier=get_score_tier(score).value if score is not None else None,
            category=category,
            website_quality=website_quality,
            status=status,
        )
