"""
Merchant API Service

Handles:
    1. Order creation (forward the storefront's order, return the widget token)
    2. Webhook signature verification (Revolut-Signature, v1 scheme)
    3. Webhook acknowledgment (log the event, no reconciliation)

The server keeps no state: every create-order call is exactly one upstream
request, and webhook events are only logged.
"""
import hashlib
import hmac
import logging
import time
from typing import Optional

import httpx

from config import settings
from domain.constants import API_VERSION_HEADER, SIGNATURE_VERSION
from domain.enums import WebhookEventType
from domain.errors import UpstreamError
from models import CreateOrderRequest, CreateOrderResponse, WebhookEvent

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════
# HTTP Client
# ════════════════════════════════════════════════════════════════════


def _build_client() -> httpx.AsyncClient:
    """Create the HTTP client used for one merchant API call."""
    return httpx.AsyncClient(timeout=settings.merchant_api_timeout_seconds)


def _get_headers() -> dict:
    """Build merchant API authentication headers."""
    return {
        "Authorization": f"Bearer {settings.merchant_api_secret_key}",
        "Content-Type": "application/json",
        API_VERSION_HEADER: settings.merchant_api_version,
    }


# ════════════════════════════════════════════════════════════════════
# Order Management
# ════════════════════════════════════════════════════════════════════


async def create_order(req: CreateOrderRequest) -> CreateOrderResponse:
    """
    Create an order with the merchant API.

    The submitted fields are forwarded unchanged; line_items in particular
    is passed through exactly as received.

    Returns:
        CreateOrderResponse with the order token and the public key

    Raises:
        UpstreamError on any failure (missing config, network, non-2xx,
        response without a token)
    """
    if not settings.merchant_api_url or not settings.merchant_api_secret_key:
        logger.error(
            "MERCHANT_API_URL / MERCHANT_API_SECRET_KEY not configured — "
            "cannot create order."
        )
        raise UpstreamError()

    payload = req.to_upstream_payload()
    logger.info(f"Creating order with payload: {payload}")

    try:
        async with _build_client() as client:
            response = await client.post(
                settings.merchant_api_url,
                headers=_get_headers(),
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(
            f"Error creating order: HTTP {e.response.status_code} {e.response.text}"
        )
        raise UpstreamError(upstream_status=e.response.status_code) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error creating order: {e}")
        raise UpstreamError() from e

    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        logger.error(f"Error creating order: no token in response {data}")
        raise UpstreamError(upstream_status=response.status_code)

    logger.info(
        f"  💳 Order created: id={data.get('id')} state={data.get('state')}"
    )

    return CreateOrderResponse(token=token, publicKey=settings.merchant_api_public_key)


# ════════════════════════════════════════════════════════════════════
# Webhook Verification
# ════════════════════════════════════════════════════════════════════


def compute_signature(payload: bytes, timestamp: str, secret: str) -> str:
    """Signature for a raw webhook body: v1=hex(HMAC-SHA256(secret, 'ts.body'))."""
    signed = timestamp.encode("utf-8") + b"." + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_webhook_signature(
    payload: bytes,
    signature_header: Optional[str],
    timestamp: Optional[str],
    secret: Optional[str] = None,
    tolerance_seconds: Optional[int] = None,
    now: Optional[float] = None,
) -> bool:
    """
    Verify a merchant API webhook signature.

    The signature header may carry several comma-separated signatures
    while a signing secret is being rotated; any match is accepted.

    Fails closed: a missing secret, signature or timestamp is a mismatch.
    The timestamp is in milliseconds; with a positive tolerance it must be
    within that many seconds of now.
    """
    secret = settings.webhook_signing_secret if secret is None else secret
    if not secret:
        logger.error(
            "WEBHOOK_SIGNING_SECRET not configured — rejecting webhook."
        )
        return False

    if not signature_header or not timestamp:
        logger.warning("Webhook received without signature or timestamp header")
        return False

    if tolerance_seconds is None:
        tolerance_seconds = settings.webhook_timestamp_tolerance_seconds
    if tolerance_seconds > 0:
        try:
            sent_at = int(timestamp) / 1000
        except ValueError:
            logger.warning(f"Webhook timestamp is not numeric: {timestamp!r}")
            return False
        current = time.time() if now is None else now
        if abs(current - sent_at) > tolerance_seconds:
            logger.warning(f"Webhook timestamp outside tolerance: {timestamp}")
            return False

    expected = compute_signature(payload, timestamp, secret)
    candidates = [s.strip() for s in signature_header.split(",")]
    return any(hmac.compare_digest(expected, candidate) for candidate in candidates)


# ════════════════════════════════════════════════════════════════════
# Webhook Processing
# ════════════════════════════════════════════════════════════════════


def process_webhook(event: WebhookEvent) -> str:
    """
    Log a merchant API webhook event.

    Returns the handled event type, or "unhandled". No order state is
    touched; the caller always acknowledges with 200.
    """
    logger.info(f"[Webhook] Received event: {event.event} for Order: {event.order_id}")

    if event.event == WebhookEventType.ORDER_COMPLETED.value:
        logger.info(f"  ✅ Payment Successful! Order: {event.order_id}")
    elif event.event == WebhookEventType.ORDER_AUTHORISED.value:
        logger.info("Payment Authorised. Capture funds if manual capture is enabled.")
    elif event.event == WebhookEventType.ORDER_CANCELLED.value:
        logger.info("Payment Cancelled.")
    else:
        logger.info(f"Unhandled event type: {event.event}")
        return "unhandled"

    return event.event
