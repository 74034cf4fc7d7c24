"""
Checkout session — ties the cart, the payment server and the widget together.

Lifecycle:
    1. confirm(): create the order on the server, initialise the widget with
       the public key, lock the cart, mount the widget bound to the order
       token and subscribe to payment events
    2. payment events move the status to success or error
    3. reset(): destroy the widget and start over with an empty cart

Only one create-order call is in flight at a time.
"""
import inspect
import logging
import random
from typing import Any, Callable, Optional

from domain.constants import (
    ORDER_REFERENCE_LETTERS,
    ORDER_REFERENCE_PREFIX,
    DROP_OFF_PAYMENT_SUMMARY,
    WIDGET_CONTAINER_ID,
    WIDGET_PAYMENT_EVENT,
)
from domain.enums import PaymentStatus, WidgetEventType
from storefront.api_client import CheckoutError, StorefrontClient
from storefront.cart import Cart
from storefront.widget import CheckoutWidget

logger = logging.getLogger(__name__)

WidgetFactory = Callable[[dict], Any]


def generate_order_reference(rng: Optional[random.Random] = None) -> str:
    """Display label for an order: SC-XX-0000 (letters A-Z, number 1000-9999)."""
    rng = rng or random
    letters = "".join(rng.choice(ORDER_REFERENCE_LETTERS) for _ in range(2))
    number = rng.randint(1000, 9999)
    return f"{ORDER_REFERENCE_PREFIX}-{letters}-{number}"


class CheckoutSession:
    """UI-side state of one checkout: status, message, order reference, widget."""

    def __init__(
        self,
        client: StorefrontClient,
        widget_factory: WidgetFactory,
        cart: Optional[Cart] = None,
        mode: str = "sandbox",
        locale: str = "en",
        container: str = WIDGET_CONTAINER_ID,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.widget_factory = widget_factory
        self.cart = cart if cart is not None else Cart()
        self.mode = mode
        self.locale = locale
        self.container = container
        self._rng = rng

        self.status = PaymentStatus.IDLE
        self.message = ""
        self.order_reference: Optional[str] = None
        self.token: Optional[str] = None
        self.widget: Optional[CheckoutWidget] = None

    @property
    def is_confirmed(self) -> bool:
        return self.cart.locked

    @property
    def loading(self) -> bool:
        return self.status == PaymentStatus.PENDING

    async def confirm(self) -> bool:
        """
        Create the order and mount the widget.

        Returns True once the widget is mounted and awaiting payment.
        """
        if self.cart.is_empty or self.loading or self.is_confirmed:
            return False

        self.status = PaymentStatus.PENDING
        self.message = ""
        reference = generate_order_reference(self._rng)
        self.order_reference = reference

        try:
            order = await self.client.create_order(
                amount=self.cart.total_minor,
                currency=self.cart.currency,
                line_items=self.cart.line_items(),
                reference=reference,
            )
            widget = self.widget_factory({
                "locale": self.locale,
                "publicToken": order.public_key,
                "mode": self.mode,
            })
            if inspect.iscoroutine(widget):
                widget = await widget
        except CheckoutError as e:
            logger.error(f"Order {reference} could not be created: {e.message}")
            self._fail(f"Error: {e.message}")
            self.cart.unlock()
            return False
        except Exception as e:
            logger.error(f"Checkout widget failed to initialise: {e}", exc_info=True)
            self._fail(f"Error: {e}")
            self.cart.unlock()
            return False

        self.token = order.token
        self.widget = widget
        self.cart.lock()

        try:
            widget.mount(self.container, self._mount_options(order.token, reference))
            widget.on(WIDGET_PAYMENT_EVENT, self.handle_payment_event)
        except Exception as e:
            logger.error(f"Checkout widget failed to mount: {e}", exc_info=True)
            self._fail(f"Error: {e}")
            return False

        self.status = PaymentStatus.AWAITING_PAYMENT
        logger.info(f"Order {reference} awaiting payment ({self.cart.total_minor} {self.cart.currency})")
        return True

    def _mount_options(self, token: str, reference: str) -> dict:
        async def create_order():
            return {"publicId": token}

        return {
            "currency": self.cart.currency,
            "totalAmount": self.cart.total_minor,
            "merchantOrderData": {"reference": reference},
            "buttonStyle": {"radius": "small"},
            "lineItems": self.cart.widget_line_items(),
            "createOrder": create_order,
        }

    def handle_payment_event(self, event: dict) -> None:
        """Relay a widget payment event to status and message."""
        if self.widget is None:
            return

        event_type = event.get("type")
        if event_type == WidgetEventType.CANCEL.value:
            if event.get("dropOffState") == DROP_OFF_PAYMENT_SUMMARY:
                self._fail("Payment Cancelled at summary")
            else:
                self._fail("Payment Cancelled")
        elif event_type == WidgetEventType.SUCCESS.value:
            self.status = PaymentStatus.SUCCESS
            self.message = "Payment Successful!"
        elif event_type == WidgetEventType.ERROR.value:
            error = event.get("error")
            if isinstance(error, dict):
                message = error.get("message")
            elif isinstance(error, str):
                message = error
            else:
                message = None
            self._fail(message or "Unknown error")
        else:
            logger.debug(f"Ignoring widget event type: {event_type}")

    def _fail(self, message: str) -> None:
        self.status = PaymentStatus.ERROR
        self.message = message

    def reset(self) -> None:
        """Tear down the widget and return to an empty, unlocked cart."""
        if self.widget is not None:
            try:
                self.widget.destroy()
            except Exception as e:
                logger.warning(f"Error destroying widget: {e}")
        self.widget = None
        self.token = None
        self.cart.clear()
        self.cart.unlock()
        self.message = ""
        self.status = PaymentStatus.IDLE
        self.order_reference = None
