"""
Input validation utilities for the storefront client.

The server forwards orders unvalidated; these checks run where the user
types, before anything reaches the cart.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional

from domain.constants import SUPPORTED_CURRENCIES
from utils.money import to_minor_units


def validate_currency(code: str) -> str:
    """
    Validate a storefront currency code.

    Returns:
        The upper-cased code

    Raises:
        ValueError if the code is not one the storefront offers
    """
    if not code:
        raise ValueError("Currency is required")

    normalized = code.strip().upper()
    if normalized not in SUPPORTED_CURRENCIES:
        raise ValueError(
            f"Unsupported currency {code!r}: expected one of {', '.join(SUPPORTED_CURRENCIES)}"
        )
    return normalized


def parse_price(raw) -> Optional[Decimal]:
    """
    Parse a user-entered price.

    Returns None for empty, non-numeric, non-finite or non-positive input,
    and for amounts that round to zero or cannot be expressed in minor units.
    """
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        price = Decimal(text)
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0:
        return None
    try:
        minor = to_minor_units(price)
    except InvalidOperation:
        return None
    if minor <= 0:
        return None
    return price
