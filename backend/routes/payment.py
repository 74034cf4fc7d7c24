"""
Payment Routes — order creation proxy and merchant webhooks

Endpoints:
    GET  /api/payment/config        — Widget init settings (public key, mode)
    POST /api/payment/create-order  — Forward an order, return the widget token
    POST /api/payment/webhook       — Merchant API webhook (always acknowledged)
"""
import json
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from config import settings
from domain.constants import SIGNATURE_HEADER, SUPPORTED_CURRENCIES, TIMESTAMP_HEADER
from domain.errors import UnauthorizedError, ValidationError
from domain.responses import StandardErrorResponse
from middleware.rate_limit import rate_limit
from models import (
    CreateOrderRequest,
    CreateOrderResponse,
    PaymentConfigResponse,
    WebhookEvent,
)
from services import merchant_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment", tags=["payment"])


@router.get("/config", response_model=PaymentConfigResponse)
async def get_payment_config():
    """Settings the storefront needs to initialise the checkout widget."""
    return PaymentConfigResponse(
        publicKey=settings.merchant_api_public_key,
        mode=settings.checkout_mode,
        locale=settings.checkout_locale,
        supportedCurrencies=list(SUPPORTED_CURRENCIES),
    )


@router.post(
    "/create-order",
    response_model=CreateOrderResponse,
    responses={500: {"model": StandardErrorResponse}},
)
async def create_order(
    request: Request,
    _rate=Depends(rate_limit(
        scope="create-order",
        max_requests=settings.create_order_rate_limit,
        window_seconds=settings.create_order_rate_window_seconds,
    )),
):
    """
    Create an order with the merchant API.

    The body is forwarded as-is; the response carries the order token for
    the checkout widget and the public key to initialise it with. An empty
    body, or a JSON value that is not an object, forwards no fields.
    """
    body = await request.body()
    try:
        data = json.loads(body) if body.strip() else {}
    except ValueError:
        raise ValidationError("Invalid JSON payload")

    if not isinstance(data, dict):
        logger.warning(f"create-order body is a {type(data).__name__}, forwarding no fields")
        data = {}

    req = CreateOrderRequest.model_validate(data)
    return await merchant_service.create_order(req)


@router.post("/webhook", status_code=status.HTTP_200_OK)
async def merchant_webhook(request: Request):
    """
    Merchant API webhook callback.

    Always acknowledged with 200 so the processor stops retrying. When
    VERIFY_WEBHOOK_SIGNATURES is on, unsigned or mis-signed calls get 401.
    """
    body = await request.body()

    if settings.verify_webhook_signatures:
        signature = request.headers.get(SIGNATURE_HEADER)
        timestamp = request.headers.get(TIMESTAMP_HEADER)
        if not merchant_service.verify_webhook_signature(body, signature, timestamp):
            raise UnauthorizedError("Invalid webhook signature")

    try:
        data = json.loads(body or b"{}")
        event = WebhookEvent.model_validate(data)
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"[Webhook] Unreadable payload acknowledged: {e}")
        return Response(status_code=status.HTTP_200_OK)

    merchant_service.process_webhook(event)
    return Response(status_code=status.HTTP_200_OK)
