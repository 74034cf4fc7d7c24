"""
Storefront HTTP client for the payment server.
"""
import logging
from typing import List, Optional

import httpx

from models import CreateOrderResponse, PaymentConfigResponse

logger = logging.getLogger(__name__)

CREATE_ORDER_PATH = "/api/payment/create-order"
CONFIG_PATH = "/api/payment/config"


class CheckoutError(Exception):
    """Raised when the payment server cannot provide an order token."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull the message out of the server's error envelope, if any."""
    try:
        body = response.json()
    except ValueError:
        return f"Request failed with status code {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str):
        return error
    return f"Request failed with status code {response.status_code}"


class StorefrontClient:
    """
    Thin async client for the payment server's storefront endpoints.

    Pass either a base_url (a client is created per call) or a ready
    httpx.AsyncClient, e.g. one bound to an ASGITransport in tests.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self.timeout = timeout

    async def _post(self, path: str, payload: dict) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(path, json=payload)
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            return await client.post(path, json=payload)

    async def _get(self, path: str) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(path)
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            return await client.get(path)

    async def create_order(
        self,
        amount: int,
        currency: str,
        line_items: List[dict],
        reference: str,
    ) -> CreateOrderResponse:
        """
        Ask the server to create an order; returns the token and public key.

        Raises:
            CheckoutError on transport failure or a non-2xx answer
        """
        payload = {
            "amount": amount,
            "currency": currency,
            "line_items": line_items,
            "merchantOrderData": {"reference": reference},
        }
        try:
            response = await self._post(CREATE_ORDER_PATH, payload)
        except httpx.HTTPError as e:
            logger.error(f"Create order request failed: {e}")
            raise CheckoutError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            raise CheckoutError(_error_message(response), status_code=response.status_code)

        try:
            return CreateOrderResponse.model_validate(response.json())
        except ValueError as e:
            raise CheckoutError("Malformed create-order response", status_code=response.status_code) from e

    async def get_config(self) -> PaymentConfigResponse:
        """Widget init settings published by the server."""
        try:
            response = await self._get(CONFIG_PATH)
        except httpx.HTTPError as e:
            raise CheckoutError(str(e) or e.__class__.__name__) from e
        if response.is_error:
            raise CheckoutError(_error_message(response), status_code=response.status_code)
        return PaymentConfigResponse.model_validate(response.json())
