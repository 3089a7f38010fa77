"""
Lead entity models.

This module contains the database entity for sales leads: prospective
clients captured manually, through the website form or from Google Places
discovery. A lead carries the facts used by the scoring engine together
with its pipeline status and outreach history.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from leadsync.core.models.domain import LeadSource, LeadStatus

from ..base import Base, new_id, utc_now


class LeadBase(Base):
    """Base fields for lead entity."""

    # Identity and contact
    name: str = Field(max_length=255, index=True, description="Contact or business name")
    company: Optional[str] = Field(default=None, max_length=255, index=True, description="Company name")
    email: Optional[str] = Field(default=None, max_length=255, description="Contact email address")
    phone: Optional[str] = Field(default=None, max_length=64, description="Contact phone number")

    # Website assessment
    website_url: Optional[str] = Field(default=None, max_length=512)
    has_website: bool = Field(default=False)
    website_quality: Optional[str] = Field(default=None, max_length=16, description="POOR, FAIR, GOOD or EXCELLENT")
    website_score: Optional[int] = Field(default=None, description="Site quality score between 0 and 100")
    website_checked_at: Optional[datetime] = Field(sa_type=DateTime, default=None)

    # Organisation facts
    annual_revenue: Optional[int] = Field(default=None, description="Annual revenue in whole dollars")
    category: Optional[str] = Field(default=None, max_length=128)
    employee_count: Optional[int] = Field(default=None)

    # Address
    address: Optional[str] = Field(default=None, max_length=512)
    city: Optional[str] = Field(default=None, max_length=128)
    state: Optional[str] = Field(default=None, max_length=64)
    zip_code: Optional[str] = Field(default=None, max_length=16)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)

    # Place data
    source: str = Field(default=LeadSource.manual.value, max_length=32)
    google_place_id: Optional[str] = Field(default=None, max_length=255, index=True)
    rating: Optional[float] = Field(default=None)
    total_ratings: Optional[int] = Field(default=None)

    # Pipeline
    status: str = Field(default=LeadStatus.new.value, max_length=16, index=True)
    lead_score: int = Field(default=0, index=True)
    emails_sent: int = Field(default=0)
    last_contacted_at: Optional[datetime] = Field(sa_type=DateTime, default=None)
    converted_at: Optional[datetime] = Field(sa_type=DateTime, default=None)

    # Free-form
    tags: str = Field(default="[]", description="JSON array of tags")
    notes: Optional[str] = Field(default=None)


class Lead(LeadBase, table=True):
    """Entity for a sales lead.

    Table: ls_leads
    """

    __tablename__ = "ls_leads"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_tags_list(self) -> List[str]:
        """Get tags as a list."""
        try:
            return json.loads(self.tags) if self.tags else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_tags_list(self, tags: List[str]) -> None:
        """Set tags from a list."""
        self.tags = json.dumps(tags)

    def __repr__(self) -> str:
        return f"Lead(id={self.id}, name={self.name}, status={self.status}, score={self.lead_score})"
