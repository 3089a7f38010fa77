import base64
import hashlib
import hmac
import json

import pytest

from leadsync.reconciliation import (
    WebhookPayloadError,
    WebhookSignatureError,
    compute_square_signature,
    compute_stripe_signature,
    parse_event,
    verify_square_signature,
    verify_stripe_signature,
)

SECRET = "whsec_test"
NOW = 1_760_000_000
PAYLOAD = json.dumps({"id": "evt_1", "type": "invoice.paid"}).encode()


def _stripe_header(payload: bytes = PAYLOAD, timestamp: int = NOW, secret: str = SECRET) -> str:
    return f"t={timestamp},v1={compute_stripe_signature(payload, timestamp, secret)}"


class TestStripeSignature:
    def test_matches_reference_hmac(self) -> None:
        expected = hmac.new(SECRET.encode(), f"{NOW}.".encode() + PAYLOAD, hashlib.sha256).hexdigest()
        assert compute_stripe_signature(PAYLOAD, NOW, SECRET) == expected

    def test_valid_signature_returns_event(self) -> None:
        event = verify_stripe_signature(PAYLOAD, _stripe_header(), SECRET, now=NOW + 10)
        assert event == {"id": "evt_1", "type": "invoice.paid"}

    def test_any_v1_signature_may_match(self) -> None:
        header = f"t={NOW},v1=deadbeef,v0=ignored,{_stripe_header().split(',')[1]}"
        assert verify_stripe_signature(PAYLOAD, header, SECRET, now=NOW)["id"] == "evt_1"

    @pytest.mark.parametrize(
        "header, message",
        [
            (None, "No signature provided"),
            ("", "No signature provided"),
            ("v1=abc", "Unable to extract timestamp"),
            (f"t={NOW}", "Unable to extract timestamp"),
            ("t=notanumber,v1=abc", "Unable to extract timestamp"),
            (f"t={NOW},v1=abc", "No signatures found matching"),
        ],
    )
    def test_rejects_bad_headers(self, header, message) -> None:
        with pytest.raises(WebhookSignatureError, match=message):
            verify_stripe_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_rejects_other_secret(self) -> None:
        with pytest.raises(WebhookSignatureError):
            verify_stripe_signature(PAYLOAD, _stripe_header(secret="whsec_other"), SECRET, now=NOW)

    def test_rejects_tampered_body(self) -> None:
        with pytest.raises(WebhookSignatureError):
            verify_stripe_signature(PAYLOAD + b" ", _stripe_header(), SECRET, now=NOW)

    def test_rejects_stale_timestamp(self) -> None:
        with pytest.raises(WebhookSignatureError, match="tolerance"):
            verify_stripe_signature(PAYLOAD, _stripe_header(), SECRET, now=NOW + 301)

    def test_signed_non_object_is_payload_error(self) -> None:
        payload = b"[1, 2]"
        with pytest.raises(WebhookPayloadError):
            verify_stripe_signature(payload, _stripe_header(payload), SECRET, now=NOW)


class TestSquareSignature:
    URL = "https://crm.agency.test/api/v1/webhooks/square"
    KEY = "sq-signature-key"

    def test_signs_url_plus_body(self) -> None:
        digest = hmac.new(self.KEY.encode(), self.URL.encode() + PAYLOAD, hashlib.sha256).digest()
        assert compute_square_signature(PAYLOAD, self.KEY, self.URL) == base64.b64encode(digest).decode()

    def test_verify(self) -> None:
        signature = compute_square_signature(PAYLOAD, self.KEY, self.URL)
        assert verify_square_signature(PAYLOAD, signature, self.KEY, self.URL) is True
        assert verify_square_signature(PAYLOAD, signature, self.KEY, "https://other.test/hook") is False
        assert verify_square_signature(PAYLOAD + b"x", signature, self.KEY, self.URL) is False

    def test_body_only_without_notification_url(self) -> None:
        signature = compute_square_signature(PAYLOAD, self.KEY)
        assert verify_square_signature(PAYLOAD, signature, self.KEY) is True

    @pytest.mark.parametrize("header, key", [(None, "k"), ("", "k"), ("sig", None), ("sig", "")])
    def test_missing_header_or_key(self, header, key) -> None:
        assert verify_square_signature(PAYLOAD, header, key) is False


class TestParseEvent:
    def test_object(self) -> None:
        assert parse_event(b'{"id": "x"}') == {"id": "x"}

    @pytest.mark.parametrize("payload", [b"not json", b'"string"', b"\xff\xfe"])
    def test_invalid(self, payload) -> None:
        with pytest.raises(WebhookPayloadError):
            parse_event(payload)
