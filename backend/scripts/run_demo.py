"""
End-to-End Checkout Demo against a running payment server (sandbox)

This script runs the complete storefront flow:
  1. Read widget config from the server
  2. Fill a cart (standard item + custom amount)
  3. Confirm the order (server creates it with the merchant API)
  4. Mount the simulated widget and replay a payment outcome
  5. Reset the session

Usage:
    cd backend
    python scripts/run_demo.py [success|error|cancel] [base_url]
"""
import asyncio
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(SCRIPT_DIR, ".."))

from storefront.api_client import CheckoutError, StorefrontClient
from storefront.catalog import STANDARD_ITEMS
from storefront.checkout import CheckoutSession
from storefront.widget import simulated_widget_factory
from utils.money import format_amount

OUTCOME = sys.argv[1] if len(sys.argv) > 1 else "success"
BASE = sys.argv[2] if len(sys.argv) > 2 else os.environ.get("STOREFRONT_API", "http://localhost:3000")


def section(title):
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)


async def main() -> int:
    client = StorefrontClient(BASE)

    section("1. SERVER CONFIG")
    try:
        config = await client.get_config()
    except CheckoutError as e:
        print(f"  Server not reachable at {BASE}: {e.message}")
        return 1
    print(f"  Mode:       {config.mode}")
    print(f"  Locale:     {config.locale}")
    print(f"  Currencies: {', '.join(config.supported_currencies)}")

    session = CheckoutSession(
        client,
        simulated_widget_factory,
        mode=config.mode,
        locale=config.locale,
    )

    section("2. FILL CART")
    session.cart.add(STANDARD_ITEMS[0])
    session.cart.add_custom("12.50")
    for entry in session.cart.items:
        print(f"  {entry.item.name:<28} {format_amount(entry.price, session.cart.currency)}")
    print(f"  {'Total':<28} {format_amount(session.cart.total, session.cart.currency)}")

    section("3. CONFIRM ORDER")
    if not await session.confirm():
        print(f"  Failed: {session.message}")
        return 1
    print(f"  Reference: {session.order_reference}")
    print(f"  Token:     {session.token}")
    print(f"  Status:    {session.status.value}")

    section(f"4. PAYMENT OUTCOME: {OUTCOME.upper()}")
    widget = session.widget
    if OUTCOME == "error":
        widget.fail("Insufficient funds")
    elif OUTCOME == "cancel":
        widget.cancel(at_summary=True)
    else:
        widget.succeed()
    print(f"  Status:  {session.status.value}")
    print(f"  Message: {session.message}")

    section("5. RESET")
    session.reset()
    print(f"  Status: {session.status.value} | Cart items: {len(session.cart)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
