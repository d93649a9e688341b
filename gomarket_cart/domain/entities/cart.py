"""
Cart Entity - ordered, id-unique collection of line items
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from gomarket_cart.domain.entities.line_item import LineItem, ProductData


@dataclass(frozen=True)
class Cart:
    """
    Immutable cart snapshot

    Every transformation returns a new ``Cart``; the snapshot it was derived
    from is never modified. Items keep insertion order and existing items keep
    their position when updated.
    """

    items: Tuple[LineItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("Cart items must have unique ids")

    @classmethod
    def empty(cls) -> "Cart":
        """Create an empty cart"""
        return cls(())

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def __contains__(self, product_id: object) -> bool:
        return any(item.id == product_id for item in self.items)

    def get(self, product_id: str) -> Optional[LineItem]:
        """Get the line item for ``product_id`` if present"""
        return next((item for item in self.items if item.id == product_id), None)

    @property
    def ids(self) -> List[str]:
        return [item.id for item in self.items]

    @property
    def total_quantity(self) -> int:
        """Number of units across all items"""
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def add(self, product: ProductData) -> "Cart":
        """
        Add one unit of ``product``

        A product already in the cart is replaced in place by the new product
        data with its quantity raised by one. Otherwise it is appended with
        quantity 1.
        """
        if product.id in self:
            return Cart(
                tuple(
                    item.readded(product) if item.id == product.id else item
                    for item in self.items
                )
            )
        return Cart(self.items + (LineItem.from_product(product),))

    def increment(self, product_id: str) -> "Cart":
        """Add one unit to the matching item; unknown ids leave the cart as is"""
        return Cart(
            tuple(
                item.incremented() if item.id == product_id else item
                for item in self.items
            )
        )

    def decrement(self, product_id: str) -> "Cart":
        """Remove one unit from the matching item, dropping it at zero"""
        updated = []
        for item in self.items:
            if item.id != product_id:
                updated.append(item)
                continue

            remaining = item.decremented()
            if remaining is not None:
                updated.append(remaining)

        return Cart(tuple(updated))
