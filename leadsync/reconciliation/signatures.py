"""
Webhook signature verification.

Stripe signs ``"{timestamp}.{body}"`` with HMAC-SHA256 and sends the hex
digest in the ``Stripe-Signature`` header as ``t=<ts>,v1=<hex>``. Square
signs the notification URL followed by the body and sends the base64
digest in ``x-square-hmac-sha256-signature``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, List, Optional, Tuple

from .errors import WebhookPayloadError, WebhookSignatureError

DEFAULT_STRIPE_TOLERANCE = 300


def parse_event(payload: bytes) -> Dict[str, Any]:
    """Decode a webhook body into an event object."""
    try:
        event = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as e:
        raise WebhookPayloadError(f"Invalid JSON payload: {e}") from e
    if not isinstance(event, dict):
        raise WebhookPayloadError("Webhook payload must be a JSON object")
    return event


def _parse_stripe_header(header: str) -> Tuple[Optional[int], List[str]]:
    timestamp: Optional[int] = None
    signatures: List[str] = []
    for item in header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                raise WebhookSignatureError("Unable to extract timestamp and signatures from header")
        elif key == "v1":
            signatures.append(value)
    return timestamp, signatures


def compute_stripe_signature(payload: bytes, timestamp: int, secret: str) -> str:
    signed = f"{timestamp}.".encode("utf-8") + payload
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def verify_stripe_signature(
    payload: bytes,
    header: Optional[str],
    secret: str,
    *,
    tolerance: int = DEFAULT_STRIPE_TOLERANCE,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """Verify a Stripe webhook and return the decoded event.

    Args:
        payload: Raw request body
        header: Value of the ``Stripe-Signature`` header
        secret: Endpoint signing secret (``whsec_...``)
        tolerance: Maximum age of the signed timestamp in seconds
        now: Current unix time, injectable for tests

    Raises:
        WebhookSignatureError: Missing, malformed, stale or mismatched signature
        WebhookPayloadError: The verified body is not a JSON object
    """
    if not header:
        raise WebhookSignatureError("No signature provided")

    timestamp, signatures = _parse_stripe_header(header)
    if timestamp is None or not signatures:
        raise WebhookSignatureError("Unable to extract timestamp and signatures from header")

    expected = compute_stripe_signature(payload, timestamp, secret)
    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise WebhookSignatureError("No signatures found matching the expected signature for payload")

    current = time.time() if now is None else now
    if abs(current - timestamp) > tolerance:
        raise WebhookSignatureError("Timestamp outside the tolerance zone")

    return parse_event(payload)


def compute_square_signature(body: bytes, signature_key: str, notification_url: Optional[str] = None) -> str:
    message = (notification_url or "").encode("utf-8") + body
    digest = hmac.new(signature_key.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_square_signature(
    body: bytes,
    signature_header: Optional[str],
    signature_key: Optional[str],
    notification_url: Optional[str] = None,
) -> bool:
    """Check a Square webhook signature.

    Without a configured notification URL only the body is signed.

    Returns:
        True when the signature matches; False when it does not or when the
        key or header is missing
    """
    if not signature_key or not signature_header:
        return False
    expected = compute_square_signature(body, signature_key, notification_url)
    return hmac.compare_digest(expected.encode("ascii"), signature_header.encode("utf-8"))
