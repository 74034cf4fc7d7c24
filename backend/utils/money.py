"""
Money helpers — Decimal arithmetic to avoid floating-point drift.
"""
from decimal import Decimal, ROUND_HALF_UP


def to_decimal(amount) -> Decimal:
    """Convert a price (str, int, float or Decimal) to Decimal via its text form."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def to_minor_units(amount) -> int:
    """Major units → integer minor units (pence/cents), rounding half up."""
    return int((to_decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(amount, currency: str) -> str:
    """Display form, e.g. 'GBP 49.99'."""
    return f"{currency} {to_decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"
