"""Error types raised while verifying and decoding provider webhooks."""

from __future__ import annotations


class WebhookError(Exception):
    """Base error for webhook handling."""


class WebhookSignatureError(WebhookError):
    """The signature header is missing, malformed, stale or does not match."""


class WebhookPayloadError(WebhookError):
    """The body is not valid JSON or lacks the event envelope fields."""
