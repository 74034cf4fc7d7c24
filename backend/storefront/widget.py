"""
Checkout widget host interface.

The real widget is a vendor script rendered in the browser. The checkout
session only needs three things from it: mount with options, subscribe
to events, destroy. SimulatedCheckoutWidget implements the same surface
for sandbox demos and tests, letting a driver emit payment events.
"""
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from domain.constants import DROP_OFF_PAYMENT_SUMMARY, WIDGET_PAYMENT_EVENT
from domain.enums import WidgetEventType

logger = logging.getLogger(__name__)

EventHandler = Callable[[dict], None]


class CheckoutWidget(ABC):
    """Surface of the embeddable checkout widget used by CheckoutSession."""

    @abstractmethod
    def mount(self, container: str, options: dict) -> None:
        """Render into the element with id container, bound to options."""

    @abstractmethod
    def on(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe handler to a widget event."""

    @abstractmethod
    def destroy(self) -> None:
        """Unmount and drop every subscription."""


class SimulatedCheckoutWidget(CheckoutWidget):
    """In-process widget for the sandbox: records mounts, replays events."""

    def __init__(self, config: dict):
        self.config = config
        self.container: Optional[str] = None
        self.options: Optional[dict] = None
        self.destroyed = False
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    @property
    def mounted(self) -> bool:
        return self.container is not None and not self.destroyed

    def mount(self, container: str, options: dict) -> None:
        if self.destroyed:
            raise RuntimeError("Widget already destroyed")
        self.container = container
        self.options = options
        logger.debug(f"Widget mounted in #{container} ({options.get('totalAmount')} {options.get('currency')})")

    def on(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    def destroy(self) -> None:
        self.destroyed = True
        self._handlers.clear()

    async def order_public_id(self) -> Optional[str]:
        """What the widget binds its payment session to (the createOrder callback)."""
        if not self.options or "createOrder" not in self.options:
            return None
        result = await self.options["createOrder"]()
        return result.get("publicId")

    def emit(self, event: dict, event_name: str = WIDGET_PAYMENT_EVENT) -> None:
        """Deliver an event to every subscribed handler."""
        for handler in list(self._handlers.get(event_name, ())):
            handler(event)

    # Convenience emitters for the three payment outcomes
    def succeed(self) -> None:
        self.emit({"type": WidgetEventType.SUCCESS.value})

    def fail(self, message: Optional[str] = None) -> None:
        event: Dict[str, Any] = {"type": WidgetEventType.ERROR.value}
        if message is not None:
            event["error"] = {"message": message}
        self.emit(event)

    def cancel(self, at_summary: bool = False) -> None:
        event: Dict[str, Any] = {"type": WidgetEventType.CANCEL.value}
        if at_summary:
            event["dropOffState"] = DROP_OFF_PAYMENT_SUMMARY
        self.emit(event)


def simulated_widget_factory(config: dict) -> SimulatedCheckoutWidget:
    return SimulatedCheckoutWidget(config)
