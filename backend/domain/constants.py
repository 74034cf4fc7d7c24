"""
Domain constants used across services/routers and the storefront client.
"""

# Currencies offered by the storefront (first is the default)
SUPPORTED_CURRENCIES = ("GBP", "USD", "EUR")
DEFAULT_CURRENCY = SUPPORTED_CURRENCIES[0]

# Order reference label: SC-XX-0000
ORDER_REFERENCE_PREFIX = "SC"
ORDER_REFERENCE_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Merchant API headers
API_VERSION_HEADER = "Revolut-Api-Version"
SIGNATURE_HEADER = "Revolut-Signature"
TIMESTAMP_HEADER = "Revolut-Request-Timestamp"
SIGNATURE_VERSION = "v1"

# Checkout widget
WIDGET_CONTAINER_ID = "revolut-pay"
WIDGET_PAYMENT_EVENT = "payment"
DROP_OFF_PAYMENT_SUMMARY = "payment_summary"
