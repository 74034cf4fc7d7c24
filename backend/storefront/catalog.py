"""
Storefront catalog.

Standard products plus sandbox test items whose prices make the
processor's sandbox decline the payment with a specific reason.
"""
from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from domain.enums import ItemType


class CatalogItem(BaseModel):
    """A product the user can add to the cart."""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    name: str
    description: str = ""
    price: Decimal = Field(..., gt=0)
    type: ItemType = ItemType.SERVICE


STANDARD_ITEMS = (
    CatalogItem(id=1, name="Premium Subscription", description="Access to premium features", price=Decimal("49.99")),
    CatalogItem(id=2, name="Personal Consultation", description="30-min expert consultation", price=Decimal("35.00")),
)

TEST_ITEMS = (
    CatalogItem(id=3, name="Test: Decline (No Reason)", description="Triggers decline without reason", price=Decimal("10.01")),
    CatalogItem(id=4, name="Test: Insufficient Funds", description="Triggers insufficient funds error", price=Decimal("10.02")),
    CatalogItem(id=5, name="Test: Suspected Fraud", description="Triggers suspected fraud error", price=Decimal("10.03")),
    CatalogItem(id=6, name="Test: Exceeded Limit", description="Triggers withdrawal limit error", price=Decimal("10.04")),
    CatalogItem(id=7, name="Test: Do Not Honour", description="Triggers do not honour error", price=Decimal("10.05")),
)

CUSTOM_ITEM_ID = "custom"


def custom_item(price: Decimal) -> CatalogItem:
    """User-defined amount."""
    return CatalogItem(id=CUSTOM_ITEM_ID, name="Custom Amount", description="User defined", price=price)


def find_item(item_id) -> CatalogItem | None:
    """Look up a standard or test item by id."""
    for item in STANDARD_ITEMS + TEST_ITEMS:
        if str(item.id) == str(item_id):
            return item
    return None
