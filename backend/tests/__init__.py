"""
pytest test suite for the Storefront Checkout backend.

Test categories:
- Unit tests: services, cart and checkout session with faked collaborators
- API tests: FastAPI routes with the merchant API faked via httpx.MockTransport
- Integration tests: storefront client driving the real app over ASGI
"""
