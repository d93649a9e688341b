"""
Cart store

Holds the current cart snapshot. Writers must go through ``transaction()``
so each read-transform-commit cycle runs against the latest committed cart.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from gomarket_cart.domain.entities.cart import Cart
from gomarket_cart.infrastructure.utilities.exceptions import CartStoreError


class CartStore:
    """Single source of truth for the in-memory cart"""

    def __init__(self, initial: Optional[Cart] = None):
        self._cart = initial if initial is not None else Cart.empty()
        self._revision = 0
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def revision(self) -> int:
        """Number of commits applied so far"""
        return self._revision

    def read(self) -> Cart:
        """Get the current cart snapshot"""
        return self._cart

    def commit(self, new_cart: Cart) -> None:
        """Replace the current snapshot; only valid inside ``transaction()``"""
        if not self._lock.locked():
            raise CartStoreError("Cart commits must happen inside a transaction")

        if not isinstance(new_cart, Cart):
            raise CartStoreError(f"Cannot commit {type(new_cart).__name__} as a cart")

        self._cart = new_cart
        self._revision += 1
        self._logger.debug(
            "Committed cart revision %d with %d items", self._revision, len(new_cart)
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["CartStore"]:
        """Serialize a read-transform-commit cycle against other writers"""
        async with self._lock:
            yield self
