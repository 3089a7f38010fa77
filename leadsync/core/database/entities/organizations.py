"""
Client organization and project entity models.

Organizations are the agency's paying clients. Projects belong to an
organization and may carry a Stripe maintenance subscription.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from leadsync.core.models.domain import MaintenanceStatus

from ..base import Base, new_id, utc_now


class OrganizationBase(Base):
    """Base fields for organization entity."""

    name: str = Field(max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    email: Optional[str] = Field(default=None, max_length=255)
    stripe_customer_id: Optional[str] = Field(default=None, max_length=255, index=True)


class Organization(OrganizationBase, table=True):
    """Entity for a client organization.

    Table: ls_organizations
    """

    __tablename__ = "ls_organizations"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Organization(id={self.id}, slug={self.slug})"


class ProjectBase(Base):
    """Base fields for project entity."""

    name: str = Field(max_length=255)
    organization_id: str = Field(foreign_key="ls_organizations.id", max_length=64, index=True)
    stripe_customer_id: Optional[str] = Field(default=None, max_length=255, index=True)
    stripe_subscription_id: Optional[str] = Field(default=None, max_length=255, index=True)
    maintenance_status: str = Field(default=MaintenanceStatus.none.value, max_length=16)
    next_billing_date: Optional[datetime] = Field(sa_type=DateTime, default=None)


class Project(ProjectBase, table=True):
    """Entity for a client project.

    Table: ls_projects
    """

    __tablename__ = "ls_projects"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Project(id={self.id}, name={self.name}, maintenance={self.maintenance_status})"
