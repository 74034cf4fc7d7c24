"""
Pytest configuration and shared fixtures for the storefront tests.

Provides a FastAPI test client, a fake merchant API (httpx.MockTransport)
and settings overrides so no test reaches the network.
"""
import json
from typing import Generator
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app
from middleware import rate_limit

MERCHANT_URL = "https://merchant.test/api/orders"
SECRET_KEY = "sk_test_secret"
PUBLIC_KEY = "pk_test_public"
SIGNING_SECRET = "wsk_test_signing"


# ── Settings ─────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def merchant_settings(monkeypatch):
    """Point the app at a fake merchant API with known keys."""
    monkeypatch.setattr(settings, "merchant_api_url", MERCHANT_URL)
    monkeypatch.setattr(settings, "merchant_api_secret_key", SECRET_KEY)
    monkeypatch.setattr(settings, "merchant_api_public_key", PUBLIC_KEY)
    monkeypatch.setattr(settings, "environment", "development")
    monkeypatch.setattr(settings, "verify_webhook_signatures", False)
    monkeypatch.setattr(settings, "webhook_signing_secret", SIGNING_SECRET)
    return settings


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Each test starts with an empty rate-limit window."""
    rate_limit._limiter.reset()
    yield
    rate_limit._limiter.reset()


# ── Fake Merchant API ────────────────────────────────────────────────


class FakeMerchantApi:
    """Records requests sent to the merchant API and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 201
        self.body: object = {"id": "ord_123", "token": "tok_abc", "state": "pending"}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, content=str(self.body).encode())

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_payload(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def merchant_api() -> Generator[FakeMerchantApi, None, None]:
    """Replace the merchant service's HTTP client with a MockTransport-backed one."""
    fake = FakeMerchantApi()

    def build_client():
        return httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))

    with patch("services.merchant_service._build_client", side_effect=build_client):
        yield fake


# ── Test Clients ─────────────────────────────────────────────────────


@pytest.fixture(scope="function")
def test_client() -> Generator[TestClient, None, None]:
    """FastAPI test client (runs the app lifespan)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def asgi_client():
    """httpx.AsyncClient bound to the app over ASGI."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ── Test Data ────────────────────────────────────────────────────────


@pytest.fixture
def sample_line_items() -> list[dict]:
    """Line items as the storefront builds them."""
    return [
        {
            "name": "Premium Subscription",
            "description": "Access to premium features",
            "type": "service",
            "quantity": {"value": 1},
            "unit_price_amount": 4999,
            "total_amount": 4999,
        },
        {
            "name": "Custom Amount",
            "description": "User defined",
            "type": "service",
            "quantity": {"value": 1},
            "unit_price_amount": 1250,
            "total_amount": 1250,
        },
    ]


@pytest.fixture
def sample_order_body(sample_line_items) -> dict:
    return {
        "amount": 6249,
        "currency": "GBP",
        "line_items": sample_line_items,
        "merchantOrderData": {"reference": "SC-AB-1234"},
    }
