"""
Invoice and payment entity models.

Money is stored as integer cents. A payment recorded from Stripe keeps the
charge id, which is unique, so that the same charge is never booked twice.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from leadsync.core.models.domain import InvoiceStatus, PaymentStatus

from ..base import Base, new_id, utc_now


class InvoiceBase(Base):
    """Base fields for invoice entity."""

    number: str = Field(max_length=64, unique=True, index=True)
    organization_id: Optional[str] = Field(
        default=None, foreign_key="ls_organizations.id", max_length=64, index=True
    )
    project_id: Optional[str] = Field(default=None, foreign_key="ls_projects.id", max_length=64, index=True)
    status: str = Field(default=InvoiceStatus.draft.value, max_length=16, index=True)
    total_cents: int = Field(default=0, description="Invoice total in cents")
    currency: str = Field(default="USD", max_length=8)
    stripe_invoice_id: Optional[str] = Field(default=None, max_length=255, index=True)
    due_date: Optional[datetime] = Field(sa_type=DateTime, default=None)
    sent_at: Optional[datetime] = Field(sa_type=DateTime, default=None)
    paid_at: Optional[datetime] = Field(sa_type=DateTime, default=None)


class Invoice(InvoiceBase, table=True):
    """Entity for a client invoice.

    Table: ls_invoices
    """

    __tablename__ = "ls_invoices"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Invoice(id={self.id}, number={self.number}, status={self.status}, total_cents={self.total_cents})"


class PaymentBase(Base):
    """Base fields for payment entity."""

    invoice_id: str = Field(foreign_key="ls_invoices.id", max_length=64, index=True)
    amount_cents: int = Field(description="Amount paid in cents")
    status: str = Field(default=PaymentStatus.pending.value, max_length=16)
    method: str = Field(default="stripe", max_length=32)
    currency: str = Field(default="USD", max_length=8)
    stripe_charge_id: Optional[str] = Field(default=None, max_length=255, unique=True, index=True)
    stripe_payment_id: Optional[str] = Field(default=None, max_length=255, index=True)
    processed_at: Optional[datetime] = Field(sa_type=DateTime, default=None)


class Payment(PaymentBase, table=True):
    """Entity for a payment against an invoice.

    Table: ls_payments
    """

    __tablename__ = "ls_payments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Payment(id={self.id}, invoice_id={self.invoice_id}, status={self.status})"
