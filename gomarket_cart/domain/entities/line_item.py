"""
Line item entities

A ``ProductData`` is what callers hand to the cart; a ``LineItem`` is the same
product once it has a quantity attached.
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from gomarket_cart.domain.value_objects.product_id import ProductId
from gomarket_cart.domain.value_objects.quantity import Quantity


def _validate_product_fields(product_id: str, title: str, image_url: str, price: float) -> None:
    """Validate the fields shared by products and line items"""
    ProductId(product_id)

    if not isinstance(title, str):
        raise ValueError("Product title must be a string")

    if not isinstance(image_url, str):
        raise ValueError("Product image URL must be a string")

    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValueError("Product price must be a number")

    if isinstance(price, float) and not math.isfinite(price):
        raise ValueError("Product price must be a finite number")

    if price < 0:
        raise ValueError("Product price cannot be negative")


@dataclass(frozen=True)
class ProductData:
    """Complete product data supplied by the caller when adding to the cart"""

    id: str
    title: str
    image_url: str
    price: float

    def __post_init__(self):
        _validate_product_fields(self.id, self.title, self.image_url, self.price)


@dataclass(frozen=True)
class LineItem:
    """A product held in the cart together with its quantity"""

    id: str
    title: str
    image_url: str
    price: float
    quantity: int

    def __post_init__(self):
        _validate_product_fields(self.id, self.title, self.image_url, self.price)
        Quantity(self.quantity)

    @classmethod
    def from_product(cls, product: ProductData, quantity: int = 1) -> "LineItem":
        """Create a line item for a product"""
        return cls(
            id=product.id,
            title=product.title,
            image_url=product.image_url,
            price=product.price,
            quantity=quantity,
        )

    def incremented(self) -> "LineItem":
        """Return this item with one more unit"""
        return replace(self, quantity=Quantity(self.quantity).increment().value)

    def decremented(self) -> Optional["LineItem"]:
        """Return this item with one unit less, or None once it runs out"""
        if self.quantity <= 1:
            return None
        return replace(self, quantity=self.quantity - 1)

    def readded(self, product: ProductData) -> "LineItem":
        """Refresh title, image and price from ``product`` and add one unit"""
        return LineItem.from_product(product, quantity=self.quantity + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            "id": self.id,
            "title": self.title,
            "image_url": self.image_url,
            "price": self.price,
            "quantity": self.quantity,
        }
