"""Result of handling one webhook event."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from leadsync.core.models.domain import WebhookStatus


class WebhookOutcome(BaseModel):
    status: WebhookStatus
    detail: Optional[str] = None
    event_id: Optional[str] = None
    event_type: Optional[str] = None

    @classmethod
    def processed(cls, detail: Optional[str] = None) -> "WebhookOutcome":
        return cls(status=WebhookStatus.processed, detail=detail)

    @classmethod
    def ignored(cls, detail: Optional[str] = None) -> "WebhookOutcome":
        return cls(status=WebhookStatus.ignored, detail=detail)
