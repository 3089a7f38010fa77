"""Domain enums shared by entities, services and API models."""

from __future__ import annotations

from enum import Enum


class WebsiteQuality(str, Enum):
    """Assessed quality of a prospect's website.

    Lower quality means a bigger opportunity for the agency.
    """

    poor = "POOR"
    fair = "FAIR"
    good = "GOOD"
    excellent = "EXCELLENT"


class LeadStatus(str, Enum):
    """Position of a lead in the sales pipeline."""

    new = "NEW"
    contacted = "CONTACTED"
    qualified = "QUALIFIED"
    converted = "CONVERTED"
    lost = "LOST"


class LeadSource(str, Enum):
    """Where a lead was first captured."""

    manual = "MANUAL"
    google_places = "GOOGLE_PLACES"
    website_form = "WEBSITE_FORM"


class ScoreTier(str, Enum):
    """Coarse score bands used for map markers and tags."""

    hot = "HOT"
    warm = "WARM"
    cool = "COOL"
    cold = "COLD"


class InvoiceStatus(str, Enum):
    """Lifecycle status of a client invoice."""

    draft = "DRAFT"
    sent = "SENT"
    paid = "PAID"
    overdue = "OVERDUE"
    cancelled = "CANCELLED"


class PaymentStatus(str, Enum):
    """Status of a recorded payment."""

    pending = "PENDING"
    completed = "COMPLETED"
    failed = "FAILED"
    refunded = "REFUNDED"


class MaintenanceStatus(str, Enum):
    """Status of a project's maintenance subscription."""

    none = "NONE"
    active = "ACTIVE"
    inactive = "INACTIVE"
    cancelled = "CANCELLED"


class DonationStatus(str, Enum):
    """Status of a donation received through Square."""

    pending = "PENDING"
    completed = "COMPLETED"
    failed = "FAILED"
    cancelled = "CANCELLED"


class DonationFrequency(str, Enum):
    """How often a donation recurs."""

    one_time = "ONE_TIME"
    monthly = "MONTHLY"
    yearly = "YEARLY"


class WebhookProvider(str, Enum):
    """Payment providers that deliver webhooks."""

    stripe = "stripe"
    square = "square"


class WebhookStatus(str, Enum):
    """Outcome recorded for a received webhook event."""

    processed = "processed"
    ignored = "ignored"
    duplicate = "duplicate"
    failed = "failed"
