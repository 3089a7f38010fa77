"""I/O models for provider webhook endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class WebhookAck(BaseModel):
    received: bool = True
    status: Optional[str] = None
