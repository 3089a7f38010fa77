"""
Webhook log repository.

The log is keyed by (provider, event_id) and decides whether an incoming
event has already been handled.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.webhook_logs import WebhookLog
from .base import AsyncSQLModelRepository


class WebhookLogRepository(AsyncSQLModelRepository[WebhookLog]):
    """Repository for received webhook events."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WebhookLog)

    async def get_by_event(self, provider: str, event_id: str) -> Optional[WebhookLog]:
        """Get the log entry of a provider event.

        Args:
            provider: Provider name (stripe, square)
            event_id: Provider event identifier

        Returns:
            WebhookLog instance or None
        """
        stmt = select(WebhookLog).where((WebhookLog.provider == provider) & (WebhookLog.event_id == event_id))
        result = await self.session.exec(stmt)
        return result.first()

    async def record(
        self,
        *,
        provider: str,
        event_id: str,
        event_type: str,
        status: str,
        payload: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> WebhookLog:
        """Insert or update the log entry of an event.

        An existing entry (a previously failed attempt) is updated in place
        so that the (provider, event_id) pair stays unique.
        """
        entry = await self.get_by_event(provider, event_id)
        if entry is None:
            entry = WebhookLog(
                provider=provider,
                event_id=event_id,
                event_type=event_type,
                status=status,
                payload=payload,
                error=error,
            )
            return await self.create(entry)

        entry.event_type = event_type
        entry.status = status
        entry.payload = payload
        entry.error = error
        entry.updated_at = utc_now()
        return await self.update(entry)
