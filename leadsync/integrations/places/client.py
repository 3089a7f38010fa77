from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import httpx

from ..errors import GeocodingError, IntegrationNotConfiguredError, PlacesApiError
from .models import MAX_RESULT_COUNT, PlaceDetails, PlacesSearchPayloadDTO, PlaceSearchParams

FIELD_MASK = ",".join(
    f"places.{name}"
    for name in (
        "id",
        "displayName",
        "formattedAddress",
        "nationalPhoneNumber",
        "websiteUri",
        "rating",
        "userRatingCount",
        "types",
        "businessStatus",
        "priceLevel",
        "location",
    )
)


class PlacesClient:
    """
    Thin HTTP client for Google Geocoding and Places (New) text search.

    Responsibilities:
    - geocode a free-form location
    - search places around it
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        places_base_url: str = "https://places.googleapis.com",
        geocode_base_url: str = "https://maps.googleapis.com",
        timeout: float = 15.0,
    ) -> None:
        self.api_key = api_key
        self.places_base_url = places_base_url.rstrip("/")
        self.geocode_base_url = geocode_base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _require_key(self) -> str:
        if not self.api_key:
            raise IntegrationNotConfiguredError("GOOGLE_MAPS_API_KEY")
        return self.api_key

    async def geocode(self, location: str) -> Tuple[float, float]:
        key = self._require_key()
        url = f"{self.geocode_base_url}/maps/api/geocode/json"
        self._logger.debug("PlacesClient.geocode: GET %s address=%s", url, location)
        try:
            r = await self._http.get(url, params={"address": location, "key": key})
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GeocodingError(
                f"Geocoding failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise GeocodingError(f"Geocoding request failed: {e}") from e

        results = (r.json() or {}).get("results") or []
        if not results:
            raise GeocodingError(f"Could not geocode location: {location}", status_code=r.status_code)
        point = results[0]["geometry"]["location"]
        return float(point["lat"]), float(point["lng"])

    async def search_places(self, params: PlaceSearchParams) -> List[PlaceDetails]:
        key = self._require_key()
        lat, lng = await self.geocode(params.location)

        body = {
            "textQuery": params.text_query(),
            "locationBias": {
                "circle": {
                    "center": {"latitude": lat, "longitude": lng},
                    "radius": params.clamped_radius,
                }
            },
            "maxResultCount": MAX_RESULT_COUNT,
        }
        url = f"{self.places_base_url}/v1/places:searchText"
        self._logger.debug(
            "PlacesClient.search_places: POST %s query=%r radius=%s", url, body["textQuery"], params.clamped_radius
        )
        try:
            r = await self._http.post(
                url,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "X-Goog-Api-Key": key,
                    "X-Goog-FieldMask": FIELD_MASK,
                },
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PlacesApiError(
                f"Places search failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise PlacesApiError(f"Places search request failed: {e}") from e

        payload = PlacesSearchPayloadDTO.model_validate(r.json() or {})
        places = [dto.to_place_details() for dto in payload.places if dto.id]
        self._logger.debug("PlacesClient.search_places: got %d places", len(places))
        return places
