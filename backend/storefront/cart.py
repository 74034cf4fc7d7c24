"""
Cart state for one checkout.

Holds the selected items and the currency. Once an order is confirmed the
cart is locked: adds and currency changes are ignored until reset.
"""
import logging
import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from domain.constants import DEFAULT_CURRENCY
from models import LineItem, Quantity
from storefront.catalog import CatalogItem, custom_item
from utils.money import to_minor_units
from utils.validators import parse_price, validate_currency

logger = logging.getLogger(__name__)


class CartItem(BaseModel):
    """A catalog item placed in the cart; unique_id tells duplicates apart."""
    model_config = ConfigDict(frozen=True)

    unique_id: str
    item: CatalogItem

    @property
    def price(self) -> Decimal:
        return self.item.price

    @property
    def minor_amount(self) -> int:
        return to_minor_units(self.item.price)


class Cart:
    """Selected items plus currency."""

    def __init__(self, currency: str = DEFAULT_CURRENCY):
        self.currency = validate_currency(currency)
        self.items: List[CartItem] = []
        self.locked = False

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def add(self, item: CatalogItem) -> Optional[CartItem]:
        """Add an item; ignored while the cart is locked."""
        if self.locked:
            logger.debug(f"Cart locked, ignoring add of {item.name}")
            return None
        entry = CartItem(unique_id=uuid.uuid4().hex, item=item)
        self.items.append(entry)
        return entry

    def add_custom(self, raw_price) -> Optional[CartItem]:
        """Add a user-defined amount; blank, non-positive or unrepresentable input is ignored."""
        if self.locked:
            return None
        price = parse_price(raw_price)
        if price is None:
            return None
        return self.add(custom_item(price))

    def set_currency(self, code: str) -> bool:
        """
        Change currency. Only possible while the cart is empty and unlocked,
        so every item in an order is priced in one currency.
        """
        if self.locked or self.items:
            return False
        self.currency = validate_currency(code)
        return True

    @property
    def total(self) -> Decimal:
        """Sum of item prices."""
        return sum((entry.price for entry in self.items), Decimal("0"))

    @property
    def total_minor(self) -> int:
        """Order amount in minor units: the sum of the line-item totals."""
        return sum(entry.minor_amount for entry in self.items)

    def line_items(self) -> List[dict]:
        """Merchant API line items, one per cart entry."""
        return [
            LineItem(
                name=entry.item.name,
                description=entry.item.description or entry.item.name,
                type=entry.item.type.value,
                quantity=Quantity(value=1),
                unit_price_amount=entry.minor_amount,
                total_amount=entry.minor_amount,
            ).model_dump()
            for entry in self.items
        ]

    def widget_line_items(self) -> List[dict]:
        """Line items in the checkout widget's camelCase mount format."""
        return [
            {
                "name": entry.item.name,
                "totalAmount": entry.minor_amount,
                "unitPriceAmount": entry.minor_amount,
                "quantity": {"value": 1},
                "description": entry.item.description or entry.item.name,
                "type": entry.item.type.value,
            }
            for entry in self.items
        ]

    def lock(self):
        self.locked = True

    def unlock(self):
        self.locked = False

    def clear(self):
        self.items = []
