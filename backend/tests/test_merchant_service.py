"""
Unit tests for the merchant service.

Tests: create_order forwarding, webhook signature verification, webhook processing.
"""
import hashlib
import hmac

import pytest

from domain.errors import UpstreamError
from models import CreateOrderRequest, WebhookEvent
from services import merchant_service
from tests.conftest import PUBLIC_KEY, SIGNING_SECRET

BODY = b'{"event":"ORDER_COMPLETED","order_id":"ord_1"}'
TIMESTAMP = "1700000000000"
NOW = 1700000000.0


class TestCreateOrder:

    @pytest.mark.unit
    async def test_returns_token(self, merchant_api, sample_order_body):
        req = CreateOrderRequest.model_validate(sample_order_body)
        result = await merchant_service.create_order(req)
        assert result.token == "tok_abc"
        assert result.public_key == PUBLIC_KEY

    @pytest.mark.unit
    async def test_one_upstream_call_per_order(self, merchant_api, sample_order_body):
        req = CreateOrderRequest.model_validate(sample_order_body)
        await merchant_service.create_order(req)
        assert len(merchant_api.requests) == 1

    @pytest.mark.unit
    async def test_no_retry_on_failure(self, merchant_api, sample_order_body):
        merchant_api.status_code = 503
        merchant_api.body = {"message": "unavailable"}
        req = CreateOrderRequest.model_validate(sample_order_body)

        with pytest.raises(UpstreamError) as exc_info:
            await merchant_service.create_order(req)

        assert exc_info.value.status_code == 500
        assert exc_info.value.upstream_status == 503
        assert len(merchant_api.requests) == 1


class TestUpstreamPayload:

    @pytest.mark.unit
    def test_renames_merchant_order_data(self):
        req = CreateOrderRequest.model_validate({
            "amount": 100,
            "currency": "EUR",
            "line_items": [],
            "merchantOrderData": {"reference": "SC-ZZ-9999"},
        })
        assert req.to_upstream_payload() == {
            "amount": 100,
            "currency": "EUR",
            "line_items": [],
            "merchant_order_data": {"reference": "SC-ZZ-9999"},
        }

    @pytest.mark.unit
    def test_drops_missing_fields(self):
        assert CreateOrderRequest().to_upstream_payload() == {}

    @pytest.mark.unit
    def test_keeps_explicit_nulls(self):
        req = CreateOrderRequest.model_validate({"amount": 100, "line_items": None, "merchantOrderData": None})
        assert req.to_upstream_payload() == {"amount": 100, "line_items": None, "merchant_order_data": None}


class TestVerifyWebhookSignature:

    def _sign(self, body=BODY, timestamp=TIMESTAMP, secret=SIGNING_SECRET) -> str:
        digest = hmac.new(
            secret.encode(), f"{timestamp}.".encode() + body, hashlib.sha256
        ).hexdigest()
        return f"v1={digest}"

    @pytest.mark.unit
    def test_compute_signature_matches_scheme(self):
        assert merchant_service.compute_signature(BODY, TIMESTAMP, SIGNING_SECRET) == self._sign()

    @pytest.mark.unit
    def test_valid_signature_passes(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(), TIMESTAMP, SIGNING_SECRET, now=NOW
        ) is True

    @pytest.mark.unit
    def test_tampered_payload_fails(self):
        assert merchant_service.verify_webhook_signature(
            BODY + b" ", self._sign(), TIMESTAMP, SIGNING_SECRET, now=NOW
        ) is False

    @pytest.mark.unit
    def test_wrong_secret_fails(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(secret="other"), TIMESTAMP, SIGNING_SECRET, now=NOW
        ) is False

    @pytest.mark.unit
    def test_any_rotated_signature_passes(self):
        header = f"v1=deadbeef,{self._sign()}"
        assert merchant_service.verify_webhook_signature(
            BODY, header, TIMESTAMP, SIGNING_SECRET, now=NOW
        ) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("signature,timestamp", [
        (None, TIMESTAMP),
        ("", TIMESTAMP),
        ("v1=abc", None),
    ])
    def test_missing_headers_fail(self, signature, timestamp):
        assert merchant_service.verify_webhook_signature(
            BODY, signature, timestamp, SIGNING_SECRET, now=NOW
        ) is False

    @pytest.mark.unit
    def test_missing_secret_fails_closed(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(secret=""), TIMESTAMP, secret="", now=NOW
        ) is False

    @pytest.mark.unit
    def test_stale_timestamp_fails(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(), TIMESTAMP, SIGNING_SECRET,
            tolerance_seconds=300, now=NOW + 301,
        ) is False

    @pytest.mark.unit
    def test_zero_tolerance_skips_timestamp_check(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(), TIMESTAMP, SIGNING_SECRET,
            tolerance_seconds=0, now=NOW + 86_400,
        ) is True

    @pytest.mark.unit
    def test_non_numeric_timestamp_fails(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(timestamp="yesterday"), "yesterday", SIGNING_SECRET,
            tolerance_seconds=300, now=NOW,
        ) is False

    @pytest.mark.unit
    def test_uses_configured_secret_by_default(self):
        assert merchant_service.verify_webhook_signature(
            BODY, self._sign(), TIMESTAMP, now=NOW
        ) is True


class TestProcessWebhook:

    @pytest.mark.unit
    @pytest.mark.parametrize("event", ["ORDER_COMPLETED", "ORDER_AUTHORISED", "ORDER_CANCELLED"])
    def test_known_events_handled(self, event):
        result = merchant_service.process_webhook(WebhookEvent(event=event, order_id="ord_1"))
        assert result == event

    @pytest.mark.unit
    def test_unknown_event_unhandled(self):
        result = merchant_service.process_webhook(WebhookEvent(event="ORDER_FAILED", order_id="ord_1"))
        assert result == "unhandled"

    @pytest.mark.unit
    def test_completed_event_logged(self, caplog):
        with caplog.at_level("INFO", logger="services.merchant_service"):
            merchant_service.process_webhook(WebhookEvent(event="ORDER_COMPLETED", order_id="ord_42"))
        assert "ord_42" in caplog.text
