"""
Test configuration and fixtures for the GoMarket cart
"""

import os
from unittest.mock import patch

import pytest

from gomarket_cart.application.services.cart_service import CartService
from gomarket_cart.application.stores.cart_store import CartStore
from gomarket_cart.domain.entities.line_item import LineItem, ProductData
from gomarket_cart.infrastructure.configuration.config import reset_config
from gomarket_cart.infrastructure.persistence.in_memory_gateway import (
    InMemoryPersistenceGateway,
)

STORAGE_KEY = "@GoMarketplace:products"


@pytest.fixture(autouse=True)
def mock_env():
    """Isolate tests from the caller's environment"""
    test_env = {
        'GOMARKET_CART_ENVIRONMENT': 'test',
        'GOMARKET_CART_LOG_LEVEL': 'DEBUG',
    }

    reset_config()
    with patch.dict(os.environ, test_env, clear=True):
        yield test_env
    reset_config()


@pytest.fixture
def shoe():
    """Product used across scenarios"""
    return ProductData(id="1", title="Shoe", image_url="u", price=100)


@pytest.fixture
def shirt():
    return ProductData(
        id="2",
        title="Shirt",
        image_url="https://example.com/shirt.png",
        price=49.9,
    )


@pytest.fixture
def make_item():
    """Factory for line items with sensible defaults"""

    def _make_item(product_id: str, quantity: int = 1, **overrides) -> LineItem:
        fields = {
            "id": product_id,
            "title": f"Product {product_id}",
            "image_url": f"https://example.com/{product_id}.png",
            "price": 10.0,
            "quantity": quantity,
        }
        fields.update(overrides)
        return LineItem(**fields)

    return _make_item


@pytest.fixture
def gateway():
    return InMemoryPersistenceGateway()


@pytest.fixture
def store():
    return CartStore()


@pytest.fixture
def service(store, gateway):
    return CartService(store=store, gateway=gateway, storage_key=STORAGE_KEY)
