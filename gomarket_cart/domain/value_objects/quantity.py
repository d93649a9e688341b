"""Quantity value object"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quantity:
    """Number of units of a product held in the cart"""

    value: int

    def __post_init__(self):
        # bool is an int subclass
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Quantity must be an integer")
        if self.value < 1:
            raise ValueError("Quantity must be at least 1")

    def increment(self) -> "Quantity":
        """Return the next quantity"""
        return Quantity(self.value + 1)

    def __int__(self) -> int:
        return self.value
