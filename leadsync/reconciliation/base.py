"""
Idempotent webhook handling shared by all payment providers.

Each event is recorded in the webhook log under (provider, event_id). An
event whose entry is not ``failed`` is a duplicate and changes nothing. An
event and its log entry are written in one transaction, so a handler that
fails part way leaves no writes behind. A failed entry is retried on
redelivery and updated with the new outcome.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from leadsync.core.database import utc_now
from leadsync.core.database.repositories import RepoBundle
from leadsync.core.models.domain import WebhookStatus
from leadsync.core.monitoring import log_webhook_event

from .errors import WebhookPayloadError
from .outcome import WebhookOutcome

Clock = Callable[[], datetime]


def from_unix(timestamp: Optional[Any]) -> Optional[datetime]:
    """Convert a unix timestamp in seconds to a naive UTC datetime."""
    if timestamp in (None, ""):
        return None
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc).replace(tzinfo=None)


class WebhookReconciler(ABC):
    """Apply provider events to the database exactly once."""

    provider: str

    def __init__(self, repos: RepoBundle, *, clock: Clock = utc_now) -> None:
        self.repos = repos
        self.clock = clock
        self._logger = logging.getLogger(self.__class__.__module__)

    def event_id(self, event: Dict[str, Any]) -> Optional[str]:
        return event.get("id")

    @abstractmethod
    async def dispatch(self, event_type: str, event: Dict[str, Any]) -> WebhookOutcome:
        """Apply one event and describe what happened."""

    async def handle(self, event: Dict[str, Any]) -> WebhookOutcome:
        """Handle an event idempotently.

        Raises:
            WebhookPayloadError: The event has no id or type
            Exception: Whatever the event handler raised; the event is logged
                as failed first so a redelivery retries it
        """
        event_id = self.event_id(event)
        event_type = event.get("type")
        if not event_id or not event_type:
            raise WebhookPayloadError("Webhook event is missing its id or type")

        existing = await self.repos.webhook_logs.get_by_event(self.provider, event_id)
        if existing is not None and existing.status != WebhookStatus.failed.value:
            self._logger.info("%s webhook %s (%s) already handled", self.provider, event_id, event_type)
            log_webhook_event(self.provider, event_id, event_type, WebhookStatus.duplicate.value)
            return WebhookOutcome(
                status=WebhookStatus.duplicate,
                detail=f"Event already {existing.status}",
                event_id=event_id,
                event_type=event_type,
            )

        try:
            async with self.repos.unit_of_work():
                outcome = await self.dispatch(event_type, event)
                await self.repos.webhook_logs.record(
                    provider=self.provider,
                    event_id=event_id,
                    event_type=event_type,
                    status=outcome.status.value,
                    payload=event,
                )
        except Exception as e:
            self._logger.error("Error processing %s webhook %s (%s): %s", self.provider, event_id, event_type, e)
            await self.repos.webhook_logs.record(
                provider=self.provider,
                event_id=event_id,
                event_type=event_type,
                status=WebhookStatus.failed.value,
                payload=event,
                error=str(e) or type(e).__name__,
            )
            log_webhook_event(self.provider, event_id, event_type, WebhookStatus.failed.value)
            raise

        log_webhook_event(self.provider, event_id, event_type, outcome.status.value)
        self._logger.info(
            "%s webhook %s (%s) %s: %s", self.provider, event_id, event_type, outcome.status.value, outcome.detail
        )
        return outcome.model_copy(update={"event_id": event_id, "event_type": event_type})
