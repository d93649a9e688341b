"""
Domain value objects package

Contains immutable value objects used to validate cart data.
"""

from .product_id import ProductId
from .quantity import Quantity

__all__ = [
    "ProductId",
    "Quantity",
]
