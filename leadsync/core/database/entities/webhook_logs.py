"""
Webhook log entity models.

Every webhook event received from a payment provider is recorded once per
(provider, event_id). The log makes webhook handling idempotent: a
redelivered event that was already processed is recognised and skipped.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class WebhookLog(Base, table=True):
    """Entity for a received webhook event.

    Table: ls_webhook_logs
    """

    __tablename__ = "ls_webhook_logs"
    __table_args__ = (UniqueConstraint("provider", "event_id", name="uq_ls_webhook_logs_provider_event"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    provider: str = Field(max_length=16, index=True)
    event_id: str = Field(max_length=255, index=True)
    event_type: str = Field(max_length=128)
    status: str = Field(max_length=16)
    payload: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    error: Optional[str] = Field(default=None)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, index=True)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"WebhookLog(provider={self.provider}, event_id={self.event_id}, status={self.status})"
