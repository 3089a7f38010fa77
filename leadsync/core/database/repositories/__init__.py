"""
Data access layer.

Repositories wrap an async SQLModel session and expose CRUD plus the
domain lookups needed by services and webhook reconcilers.
"""

from .base import AsyncBaseRepository, AsyncQueryBuilder, AsyncSQLModelRepository, unit_of_work
from .bundle import RepoBundle, build_repos_from_session
from .donations import DonationRepository
from .invoices import InvoiceRepository, PaymentRepository
from .leads import LeadRepository
from .organizations import OrganizationRepository, ProjectRepository
from .webhook_logs import WebhookLogRepository

__all__ = [
    "AsyncBaseRepository",
    "AsyncQueryBuilder",
    "AsyncSQLModelRepository",
    "DonationRepository",
    "InvoiceRepository",
    "LeadRepository",
    "OrganizationRepository",
    "PaymentRepository",
    "ProjectRepository",
    "RepoBundle",
    "WebhookLogRepository",
    "build_repos_from_session",
    "unit_of_work",
]
