import pytest
from fastapi.testclient import TestClient

from shopping_pricing.app_factory import create_app
from shopping_pricing.rate_limit import limiter
from shopping_pricing.services.line_item import LineItemInput


@pytest.fixture
def client():
    """Shared FastAPI TestClient with rate limiting switched off.

    Tests that exercise rate limiting turn it back on themselves.
    """
    original_enabled = limiter.enabled
    limiter.enabled = False
    limiter.reset()

    with TestClient(create_app()) as test_client:
        yield test_client

    limiter.enabled = original_enabled
    limiter.reset()


@pytest.fixture
def make_item():
    """Factory for LineItemInput with general-rate, tax-inclusive defaults."""
    def _make(
        unit_price=10.0,
        quantity=1,
        tax_rate_code="general",
        tax_rate=7.0,
        price_includes_tax=True,
        promotion=None,
        promotion_context=None,
    ):
        return LineItemInput(
            unit_price=unit_price,
            quantity=quantity,
            tax_rate_code=tax_rate_code,
            tax_rate=tax_rate,
            price_includes_tax=price_includes_tax,
            promotion=promotion,
            promotion_context=promotion_context,
        )
    return _make
