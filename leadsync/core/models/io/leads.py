"""
Lead I/O models for API requests and responses.

These models define the contract of the leads API and are kept separate
from the ``Lead`` database entity.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leadsync.core.models.domain import LeadSource, LeadStatus, ScoreTier, WebsiteQuality
from leadsync.scoring import ScoreBreakdown


class LeadCreate(BaseModel):
    """Schema for creating a lead."""

    name: str = Field(min_length=1, max_length=255, description="Contact or business name")
    company: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=64)
    website_url: Optional[str] = Field(default=None, max_length=512)
    has_website: Optional[bool] = Field(default=None, description="Defaults to whether a website URL is given")
    website_quality: Optional[WebsiteQuality] = None
    annual_revenue: Optional[int] = Field(default=None, ge=0, description="Annual revenue in whole dollars")
    category: Optional[str] = Field(default=None, max_length=128)
    employee_count: Optional[int] = Field(default=None, ge=0)
    address: Optional[str] = Field(default=None, max_length=512)
    city: Optional[str] = Field(default=None, max_length=128)
    state: Optional[str] = Field(default=None, max_length=64)
    zip_code: Optional[str] = Field(default=None, max_length=16)
    source: LeadSource = LeadSource.manual
    status: LeadStatus = LeadStatus.new
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class LeadUpdate(BaseModel):
    """Schema for partially updating a lead. Only fields that are sent change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=64)
    website_url: Optional[str] = Field(default=None, max_length=512)
    has_website: Optional[bool] = None
    website_quality: Optional[WebsiteQuality] = None
    annual_revenue: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = Field(default=None, max_length=128)
    employee_count: Optional[int] = Field(default=None, ge=0)
    address: Optional[str] = Field(default=None, max_length=512)
    city: Optional[str] = Field(default=None, max_length=128)
    state: Optional[str] = Field(default=None, max_length=64)
    zip_code: Optional[str] = Field(default=None, max_length=16)
    status: Optional[LeadStatus] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("name", "has_website", "status")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but cannot be null")
        return value


class LeadRead(BaseModel):
    """Schema for reading a lead from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website_url: Optional[str] = None
    has_website: bool
    website_quality: Optional[str] = None
    website_score: Optional[int] = None
    website_checked_at: Optional[datetime] = None
    annual_revenue: Optional[int] = None
    category: Optional[str] = None
    employee_count: Optional[int] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source: str
    google_place_id: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    status: str
    lead_score: int
    emails_sent: int
    last_contacted_at: Optional[datetime] = None
    converted_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def _decode_tags(cls, value):
        if isinstance(value, str):
            try:
                decoded = json.loads(value) if value else []
            except json.JSONDecodeError:
                return []
            return decoded if isinstance(decoded, list) else []
        return value


class LeadScoreRead(BaseModel):
    """Score breakdown of a lead with its label, tier and map colour."""

    lead_id: str
    score: ScoreBreakdown
    label: str
    label_color: str
    tier: ScoreTier
    marker_color: str


class RescoreResult(BaseModel):
    updated: int
    total: int


class OutreachDraft(BaseModel):
    lead_id: str
    to: Optional[str] = None
    subject: str
    html: str
    text: str


class OutreachRequest(BaseModel):
    """Optional edits to the generated outreach draft."""

    subject: Optional[str] = Field(default=None, max_length=255)
    html: Optional[str] = None
    text: Optional[str] = None


class OutreachResult(BaseModel):
    lead: LeadRead
    email_id: Optional[str] = None
