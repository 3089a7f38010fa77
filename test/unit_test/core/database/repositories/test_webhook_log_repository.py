"""Unit tests for the webhook log repository."""

from __future__ import annotations

from leadsync.core.models.domain import WebhookStatus


class TestWebhookLogRepository:
    """Tests for recording webhook events per (provider, event_id)."""

    async def test_record_creates_entry(self, repos):
        entry = await repos.webhook_logs.record(
            provider="stripe",
            event_id="evt_1",
            event_type="invoice.paid",
            status=WebhookStatus.processed.value,
            payload={"id": "evt_1"},
        )

        fetched = await repos.webhook_logs.get_by_event("stripe", "evt_1")
        assert fetched.id == entry.id
        assert fetched.payload == {"id": "evt_1"}
        assert fetched.error is None

    async def test_same_event_id_per_provider_is_separate(self, repos):
        await repos.webhook_logs.record(provider="stripe", event_id="evt_1", event_type="a", status="processed")
        await repos.webhook_logs.record(provider="square", event_id="evt_1", event_type="b", status="ignored")

        assert (await repos.webhook_logs.get_by_event("stripe", "evt_1")).event_type == "a"
        assert (await repos.webhook_logs.get_by_event("square", "evt_1")).event_type == "b"

    async def test_record_updates_failed_entry_in_place(self, repos):
        failed = await repos.webhook_logs.record(
            provider="stripe", event_id="evt_1", event_type="invoice.paid", status="failed", error="boom"
        )

        retried = await repos.webhook_logs.record(
            provider="stripe", event_id="evt_1", event_type="invoice.paid", status="processed"
        )

        assert retried.id == failed.id
        assert retried.status == "processed"
        assert retried.error is None
        assert len(await repos.webhook_logs.list()) == 1
