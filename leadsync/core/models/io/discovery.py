"""I/O models for Google Places lead discovery."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_LOCATION = "Louisville, KY"
DEFAULT_MIN_SCORE = 30
MAX_ANALYZED_PLACES = 20


class DiscoveryFilters(BaseModel):
    has_website: Optional[bool] = Field(
        default=None, description="True requires a website, False requires none, null accepts both"
    )
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    min_reviews: Optional[int] = Field(default=None, ge=0)


class DiscoveryRequest(BaseModel):
    location: str = Field(default=DEFAULT_LOCATION)
    radius: int = Field(default=16000, gt=0, description="Meters; clamped to 50000")
    type: Optional[str] = None
    keyword: Optional[str] = None
    save: bool = Field(default=True, description="Score and persist places as leads")
    check_websites: bool = Field(default=False, description="Grade websites before scoring")
    min_score: int = Field(default=DEFAULT_MIN_SCORE, ge=0, le=100)
    filters: DiscoveryFilters = Field(default_factory=DiscoveryFilters)


class DiscoveredProspect(BaseModel):
    id: Optional[str] = Field(default=None, description="Lead id when saved or already known")
    place_id: str
    name: str
    address: str = ""
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    lead_score: Optional[int] = None
    tier: Optional[str] = None
    category: Optional[str] = None
    website_quality: Optional[str] = None
    status: Optional[str] = Field(default=None, description="new or existing; unset when not saving")


class DiscoveryResult(BaseModel):
    success: bool = True
    message: Optional[str] = None
    total_found: int = 0
    filtered: int = 0
    analyzed: int = 0
    saved: int = 0
    skipped_existing: int = 0
    skipped_low_score: int = 0
    prospects: List[DiscoveredProspect] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list, description="One line per place that could not be saved")
