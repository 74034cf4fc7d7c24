"""
Domain enums shared by the server and the storefront client.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """UI-side payment status for one checkout session."""
    IDLE = "idle"
    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    SUCCESS = "success"
    ERROR = "error"


class ItemType(str, Enum):
    SERVICE = "service"
    PHYSICAL = "physical"


class WebhookEventType(str, Enum):
    ORDER_COMPLETED = "ORDER_COMPLETED"
    ORDER_AUTHORISED = "ORDER_AUTHORISED"
    ORDER_CANCELLED = "ORDER_CANCELLED"


class WidgetEventType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    CANCEL = "cancel"
