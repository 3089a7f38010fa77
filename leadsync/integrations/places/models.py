"""
Models for Google Places search.

``PlaceDTO`` mirrors the wire shape of a place returned by the Places (New)
``searchText`` endpoint and converts it into the flat ``PlaceDetails`` used by
the rest of the application.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_RADIUS_METERS = 16000
MAX_RADIUS_METERS = 50000
MAX_RESULT_COUNT = 20


class PlaceSearchParams(BaseModel):
    """Parameters of a Places text search."""

    location: str = Field(description="Free-form location, e.g. 'Louisville, KY'")
    radius: int = Field(default=DEFAULT_RADIUS_METERS, description="Search radius in meters")
    type: Optional[str] = Field(default=None, description="Place type, e.g. 'nonprofit'")
    keyword: Optional[str] = Field(default=None, description="Additional search terms")

    @property
    def clamped_radius(self) -> int:
        return min(self.radius or DEFAULT_RADIUS_METERS, MAX_RADIUS_METERS)

    def text_query(self) -> str:
        parts = [p for p in (self.type, self.keyword) if p]
        parts.append(f"in {self.location}")
        return " ".join(parts)


class GeoPoint(BaseModel):
    lat: float
    lng: float


class PlaceDetails(BaseModel):
    """A business found through Places search."""

    place_id: str
    name: str
    address: str = ""
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    types: List[str] = Field(default_factory=list)
    business_status: str = "OPERATIONAL"
    price_level: Optional[str] = None
    geometry: Optional[GeoPoint] = None


class _DisplayNameDTO(BaseModel):
    text: Optional[str] = None


class _LatLngDTO(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class PlaceDTO(BaseModel):
    """Wire shape of one place in a ``searchText`` response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    display_name: Optional[_DisplayNameDTO] = Field(default=None, alias="displayName")
    formatted_address: Optional[str] = Field(default=None, alias="formattedAddress")
    national_phone_number: Optional[str] = Field(default=None, alias="nationalPhoneNumber")
    website_uri: Optional[str] = Field(default=None, alias="websiteUri")
    rating: Optional[float] = None
    user_rating_count: Optional[int] = Field(default=None, alias="userRatingCount")
    types: List[str] = Field(default_factory=list)
    business_status: Optional[str] = Field(default=None, alias="businessStatus")
    price_level: Optional[str] = Field(default=None, alias="priceLevel")
    location: Optional[_LatLngDTO] = None

    def to_place_details(self) -> PlaceDetails:
        geometry = None
        if self.location and self.location.latitude is not None and self.location.longitude is not None:
            geometry = GeoPoint(lat=self.location.latitude, lng=self.location.longitude)
        return PlaceDetails(
            place_id=self.id or "",
            name=(self.display_name.text if self.display_name else None) or "Unknown",
            address=self.formatted_address or "",
            phone=self.national_phone_number,
            website=self.website_uri,
            rating=self.rating,
            total_ratings=self.user_rating_count,
            types=list(self.types),
            business_status=self.business_status or "OPERATIONAL",
            price_level=self.price_level,
            geometry=geometry,
        )


class PlacesSearchPayloadDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    places: List[PlaceDTO] = Field(default_factory=list)
