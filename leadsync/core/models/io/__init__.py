"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- leads: Lead CRUD, scoring and outreach models
- discovery: Google Places discovery models
- payments: Stripe payment sync models
- webhooks: Webhook acknowledgement model
"""

from .discovery import DiscoveredProspect, DiscoveryFilters, DiscoveryRequest, DiscoveryResult
from .leads import (
    LeadCreate,
    LeadRead,
    LeadScoreRead,
    LeadUpdate,
    OutreachDraft,
    OutreachRequest,
    OutreachResult,
    RescoreResult,
)
from .payments import StripeSyncCounts, StripeSyncRequest, StripeSyncResponse
from .webhooks import WebhookAck

__all__ = [
    "DiscoveredProspect",
    "DiscoveryFilters",
    "DiscoveryRequest",
    "DiscoveryResult",
    "LeadCreate",
    "LeadRead",
    "LeadScoreRead",
    "LeadUpdate",
    "OutreachDraft",
    "OutreachRequest",
    "OutreachResult",
    "RescoreResult",
    "StripeSyncCounts",
    "StripeSyncRequest",
    "StripeSyncResponse",
    "WebhookAck",
]
