"""Google Places discovery client."""

from .client import FIELD_MASK, PlacesClient
from .filters import filter_places, parse_us_address
from .models import GeoPoint, PlaceDetails, PlaceSearchParams

__all__ = [
    "FIELD_MASK",
    "GeoPoint",
    "PlaceDetails",
    "PlaceSearchParams",
    "PlacesClient",
    "filter_places",
    "parse_us_address",
]
