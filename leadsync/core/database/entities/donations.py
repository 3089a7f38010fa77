"""
Donation entity models.

Donations are collected through Square checkout, invoices or
subscriptions and are reconciled from Square webhooks.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from leadsync.core.models.domain import DonationFrequency, DonationStatus

from ..base import Base, new_id, utc_now


class DonationBase(Base):
    """Base fields for donation entity."""

    donor_name: str = Field(max_length=255)
    donor_email: str = Field(max_length=255)
    amount_cents: int = Field(description="Donation amount in cents")
    frequency: str = Field(default=DonationFrequency.one_time.value, max_length=16)
    status: str = Field(default=DonationStatus.pending.value, max_length=16, index=True)
    square_payment_id: Optional[str] = Field(default=None, max_length=255, index=True)
    square_subscription_id: Optional[str] = Field(default=None, max_length=255, index=True)
    next_renewal_date: Optional[datetime] = Field(sa_type=DateTime, default=None)
    cancelled_at: Optional[datetime] = Field(sa_type=DateTime, default=None)
    thank_you_sent_at: Optional[datetime] = Field(sa_type=DateTime, default=None)


class Donation(DonationBase, table=True):
    """Entity for a donation.

    Table: ls_donations
    """

    __tablename__ = "ls_donations"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Donation(id={self.id}, status={self.status}, amount_cents={self.amount_cents})"
