"""I/O models for payment reconciliation endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class StripeSyncRequest(BaseModel):
    customer_id: Optional[str] = Field(default=None, description="Restrict the sync to one Stripe customer")
    limit: int = Field(default=100, ge=1, le=100)


class StripeSyncCounts(BaseModel):
    synced: int
    created: int
    updated: int
    errors: List[str] = Field(default_factory=list)


class StripeSyncResponse(BaseModel):
    success: bool = True
    results: StripeSyncCounts
    message: str
