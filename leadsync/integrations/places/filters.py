"""Filtering and address helpers for Places results."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import PlaceDetails


def filter_places(
    places: List[PlaceDetails],
    *,
    has_website: Optional[bool] = None,
    min_rating: Optional[float] = None,
    min_reviews: Optional[int] = None,
    prioritize_no_website: bool = True,
) -> List[PlaceDetails]:
    """Filter Places results.

    Args:
        places: Places to filter
        has_website: True requires a website, False requires none, None accepts both
        min_rating: Minimum rating; ignored unless > 0
        min_reviews: Minimum review count; ignored unless > 0
        prioritize_no_website: Stable-sort places without a website first

    Returns:
        Filtered (and possibly reordered) list
    """
    filtered: List[PlaceDetails] = []
    for place in places:
        if has_website is True and not place.website:
            continue
        if has_website is False and place.website:
            continue
        if min_rating and min_rating > 0 and (not place.rating or place.rating < min_rating):
            continue
        if min_reviews and min_reviews > 0 and (not place.total_ratings or place.total_ratings < min_reviews):
            continue
        filtered.append(place)

    if prioritize_no_website:
        filtered.sort(key=lambda p: 1 if p.website else 0)
    return filtered


def parse_us_address(address: str) -> Tuple[str, str, str]:
    """Split a formatted US address into ``(city, state, zip)``.

    "123 Main St, Louisville, KY 40202, USA" gives
    ("Louisville", "KY", "40202"). Missing parts are empty strings.
    """
    parts = [p.strip() for p in (address or "").split(",")]
    city = parts[-3] if len(parts) >= 3 else ""
    state_zip = parts[-2].split(" ") if len(parts) >= 2 else []
    state = state_zip[0] if len(state_zip) > 0 else ""
    zip_code = state_zip[1] if len(state_zip) > 1 else ""
    return city, state, zip_code
