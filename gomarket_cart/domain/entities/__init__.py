"""
Domain entities package

Contains the cart and its line items.
"""

from .cart import Cart
from .line_item import LineItem, ProductData

__all__ = ["Cart", "LineItem", "ProductData"]
