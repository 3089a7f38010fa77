"""Message and result models for the Resend email API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """An outgoing email."""

    to: Union[str, List[str]]
    subject: str
    html: str
    text: Optional[str] = None
    from_address: Optional[str] = Field(default=None, description="Overrides the default sender")
    reply_to: Optional[str] = None

    @property
    def primary_recipient(self) -> str:
        return self.to[0] if isinstance(self.to, list) else self.to

    def to_payload(self, default_from: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "from": self.from_address or default_from,
            "to": self.to if isinstance(self.to, list) else [self.to],
            "subject": self.subject,
            "html": self.html,
        }
        if self.text:
            payload["text"] = self.text
        if self.reply_to:
            payload["reply_to"] = self.reply_to
        return payload


class EmailResult(BaseModel):
    """Outcome of a send attempt. Delivery failures are reported, not raised."""

    success: bool
    error: Optional[str] = None
    email_id: Optional[str] = None
    rate_limited: bool = False
