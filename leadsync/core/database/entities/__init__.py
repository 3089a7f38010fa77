"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships.

Modules:
- leads: Sales leads and their scoring facts
- organizations: Client organizations and their projects
- invoices: Invoices and the payments booked against them
- donations: Donations collected through Square
- webhook_logs: Received payment-provider webhook events
"""

from . import donations, invoices, leads, organizations, webhook_logs
from .donations import Donation
from .invoices import Invoice, Payment
from .leads import Lead
from .organizations import Organization, Project
from .webhook_logs import WebhookLog

__all__ = [
    "Donation",
    "Invoice",
    "Lead",
    "Organization",
    "Payment",
    "Project",
    "WebhookLog",
    "donations",
    "invoices",
    "leads",
    "organizations",
    "webhook_logs",
]
