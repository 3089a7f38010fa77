"""Application services used by the API layer."""

from .discovery import DiscoveryService, discovery_tags
from .lead_service import LeadHasNoEmailError, LeadService

__all__ = ["DiscoveryService", "LeadHasNoEmailError", "LeadService", "discovery_tags"]
