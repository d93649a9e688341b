"""
GoMarket Cart

Shopping cart domain logic with key-value persistence.
"""

from gomarket_cart.application.cart_api import CartAPI, CartState
from gomarket_cart.application.services.cart_service import CartService
from gomarket_cart.application.stores.cart_store import CartStore
from gomarket_cart.domain.entities import Cart, LineItem, ProductData
from gomarket_cart.domain.repositories import PersistenceGateway
from gomarket_cart.infrastructure.container import DependencyContainer

__version__ = "1.0.0"

__all__ = [
    "Cart",
    "CartAPI",
    "CartService",
    "CartState",
    "CartStore",
    "DependencyContainer",
    "LineItem",
    "PersistenceGateway",
    "ProductData",
]
