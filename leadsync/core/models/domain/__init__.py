"""Domain enums for Leadsync."""

from __future__ import annotations

from .enums import (
    DonationFrequency,
    DonationStatus,
    InvoiceStatus,
    LeadSource,
    LeadStatus,
    MaintenanceStatus,
    PaymentStatus,
    ScoreTier,
    WebhookProvider,
    WebhookStatus,
    WebsiteQuality,
)

__all__ = [
    "DonationFrequency",
    "DonationStatus",
    "InvoiceStatus",
    "LeadSource",
    "LeadStatus",
    "MaintenanceStatus",
    "PaymentStatus",
    "ScoreTier",
    "WebhookProvider",
    "WebhookStatus",
    "WebsiteQuality",
]
