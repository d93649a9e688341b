"""
Cart service

Hydrates the cart from storage and applies add/increment/decrement, writing
the resulting cart back to storage after every change.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from gomarket_cart.application.serialization.snapshot_codec import SnapshotCodec
from gomarket_cart.application.stores.cart_store import CartStore
from gomarket_cart.domain.entities.cart import Cart
from gomarket_cart.domain.entities.line_item import ProductData
from gomarket_cart.domain.repositories.persistence_gateway import PersistenceGateway
from gomarket_cart.domain.value_objects.product_id import ProductId
from gomarket_cart.infrastructure.logging.logger_config import OperationTimer
from gomarket_cart.infrastructure.utilities.constants import StorageSettings
from gomarket_cart.infrastructure.utilities.exceptions import (
    CartConfigurationError,
    SnapshotDecodeError,
    StorageReadError,
    StorageWriteError,
)

ProductInput = Union[ProductData, Mapping[str, Any]]


class CartService:
    """
    Cart domain logic

    Handles:
    1. Hydrating the cart from storage (once, at startup)
    2. Adding products to the cart
    3. Incrementing and decrementing quantities
    4. Writing the resulting cart to storage after each change

    Mutations are serialized through the store's transaction, which stays
    held until the storage write finishes.
    """

    def __init__(
        self,
        store: CartStore,
        gateway: PersistenceGateway,
        storage_key: str = StorageSettings.PRODUCTS_KEY,
        codec: Optional[SnapshotCodec] = None,
    ):
        self._store = store
        self._gateway = gateway
        self._storage_key = storage_key
        self._codec = codec or SnapshotCodec()
        self._hydrated = False
        self._dirty = False
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def is_hydrated(self) -> bool:
        return self._hydrated

    @property
    def is_dirty(self) -> bool:
        """True while the stored snapshot may not match the in-memory cart"""
        return self._dirty

    def snapshot(self) -> Cart:
        """Get the current cart"""
        return self._store.read()

    async def hydrate(self) -> Cart:
        """
        Load the stored snapshot into the store

        A missing snapshot leaves the cart empty. A snapshot that cannot be
        decoded is logged and replaced by an empty cart.

        Raises:
            CartConfigurationError: if the cart was already hydrated
            StorageReadError: if the gateway fails to read
        """
        if self._hydrated:
            raise CartConfigurationError("Cart has already been hydrated")

        self._logger.info("📦 HYDRATE: Loading cart from '%s'", self._storage_key)

        async with self._store.transaction():
            try:
                with OperationTimer("load_cart", self._logger, {"storage_key": self._storage_key}):
                    raw = await self._gateway.get(self._storage_key)
            except Exception as e:
                self._logger.error("💥 HYDRATE FAILED: %s", e, exc_info=True)
                raise StorageReadError(self._storage_key, str(e)) from e

            if not raw:
                self._logger.info("📭 NO SNAPSHOT: Starting with an empty cart")
            else:
                try:
                    cart = self._codec.decode(raw)
                except SnapshotDecodeError as e:
                    self._logger.error(
                        "💥 CORRUPTED SNAPSHOT under '%s', starting empty: %s",
                        self._storage_key,
                        e,
                    )
                    cart = Cart.empty()
                    self._dirty = True

                self._store.commit(cart)

            self._hydrated = True

        cart = self._store.read()
        self._logger.info("✅ HYDRATED: %d items", len(cart))
        return cart

    async def add_to_cart(self, product: ProductInput) -> Cart:
        """Add one unit of ``product``, appending it if it isn't in the cart yet"""
        candidate = self._to_product(product)
        self._logger.info("🛒 ADD TO CART: Product %s", candidate.id)
        return await self._apply("add_to_cart", lambda cart: cart.add(candidate))

    async def increment(self, product_id: str) -> Cart:
        """Add one unit to the item with ``product_id``"""
        product_id = str(ProductId(product_id))
        self._logger.info("➕ INCREMENT: Product %s", product_id)
        return await self._apply("increment", lambda cart: cart.increment(product_id))

    async def decrement(self, product_id: str) -> Cart:
        """Remove one unit from the item with ``product_id``, dropping it at zero"""
        product_id = str(ProductId(product_id))
        self._logger.info("➖ DECREMENT: Product %s", product_id)
        return await self._apply("decrement", lambda cart: cart.decrement(product_id))

    async def _apply(self, operation: str, transform: Callable[[Cart], Cart]) -> Cart:
        """Run one read-transform-commit-persist cycle"""
        if not self._hydrated:
            raise CartConfigurationError(
                f"Cannot {operation} before the cart has been hydrated"
            )

        async with self._store.transaction():
            current = self._store.read()
            updated = transform(current)
            self._store.commit(updated)

            if updated == current:
                self._logger.debug("  -> %s left the cart unchanged", operation)

            await self._persist(updated)

        self._logger.info(
            "📊 CART: %d items, %d units", len(updated), updated.total_quantity
        )
        return updated

    async def _persist(self, cart: Cart) -> None:
        """Write ``cart`` as the new snapshot"""
        try:
            payload = self._codec.encode(cart)
        except Exception as e:
            self._dirty = True
            self._logger.error("💥 ENCODE FAILED: %s", e, exc_info=True)
            raise StorageWriteError(self._storage_key, f"snapshot encoding failed: {e}") from e

        try:
            with OperationTimer("persist_cart", self._logger, {"storage_key": self._storage_key}):
                saved = await self._gateway.set(self._storage_key, payload)
        except Exception as e:
            self._dirty = True
            self._logger.error("💥 PERSIST FAILED: %s", e, exc_info=True)
            raise StorageWriteError(self._storage_key, str(e)) from e

        if not saved:
            self._dirty = True
            self._logger.error("💥 PERSIST REJECTED: gateway refused '%s'", self._storage_key)
            raise StorageWriteError(self._storage_key)

        self._dirty = False

    @staticmethod
    def _to_product(product: ProductInput) -> ProductData:
        """Accept product data objects or plain mappings"""
        if isinstance(product, ProductData):
            return product

        if isinstance(product, Mapping):
            try:
                return ProductData(
                    id=product["id"],
                    title=product["title"],
                    image_url=product["image_url"],
                    price=product["price"],
                )
            except KeyError as e:
                raise ValueError(f"Product is missing field {e}") from e

        raise ValueError(f"Unsupported product type: {type(product).__name__}")
