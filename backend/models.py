"""
Pydantic models for request/response bodies.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class ApiBase(BaseModel):
    """Shared base — allows construction by Python name or alias."""
    model_config = ConfigDict(populate_by_name=True)


# ── Order Creation ──────────────────────────────────────────────────

class CreateOrderRequest(ApiBase):
    """
    Order creation body as sent by the storefront.

    Nothing is validated here: every field is forwarded to the merchant
    API as submitted.
    """
    amount: Any = None
    currency: Any = None
    line_items: Any = None
    merchant_order_data: Any = Field(default=None, alias="merchantOrderData")

    def to_upstream_payload(self) -> dict:
        """
        Merchant API order payload.

        Fields the client never sent are left out; fields sent as null are
        forwarded as null.
        """
        payload = {
            "amount": self.amount,
            "currency": self.currency,
            "merchant_order_data": self.merchant_order_data,
            "line_items": self.line_items,
        }
        return {key: value for key, value in payload.items() if key in self.model_fields_set}


class CreateOrderResponse(ApiBase):
    """Token for the checkout widget plus the public key to initialise it."""
    token: str
    public_key: str = Field(..., alias="publicKey")


class PaymentConfigResponse(ApiBase):
    """Widget initialisation settings exposed to the storefront."""
    public_key: str = Field(..., alias="publicKey")
    mode: str
    locale: str
    supported_currencies: List[str] = Field(..., alias="supportedCurrencies")


# ── Line Items ──────────────────────────────────────────────────────

class Quantity(BaseModel):
    value: int = 1


class LineItem(BaseModel):
    """Merchant API line item (amounts in minor units)."""
    name: str
    description: str
    type: str
    quantity: Quantity = Field(default_factory=Quantity)
    unit_price_amount: int
    total_amount: int


# ── Webhooks ────────────────────────────────────────────────────────

class WebhookEvent(BaseModel):
    """Merchant API webhook payload. Unknown keys are kept."""
    model_config = ConfigDict(extra="allow")

    event: Optional[str] = None
    order_id: Optional[str] = None
    merchant_order_ext_ref: Optional[str] = None
