"""
Tests for the in-memory cart store
"""

import asyncio

import pytest

from gomarket_cart.application.stores.cart_store import CartStore
from gomarket_cart.domain.entities.cart import Cart
from gomarket_cart.infrastructure.utilities.exceptions import CartStoreError


class TestCartStore:
    """Test CartStore reads, commits and transactions"""

    def test_starts_empty(self, store):
        assert store.read() == Cart.empty()
        assert store.revision == 0

    def test_initial_cart(self, make_item):
        cart = Cart((make_item("1"),))
        assert CartStore(cart).read() is cart

    def test_commit_outside_transaction_rejected(self, store, make_item):
        with pytest.raises(CartStoreError):
            store.commit(Cart((make_item("1"),)))
        assert store.read() == Cart.empty()

    @pytest.mark.asyncio
    async def test_commit_inside_transaction(self, store, make_item):
        cart = Cart((make_item("1"),))

        async with store.transaction():
            store.commit(cart)

        assert store.read() is cart
        assert store.revision == 1

    @pytest.mark.asyncio
    async def test_commit_rejects_non_cart(self, store):
        async with store.transaction():
            with pytest.raises(CartStoreError):
                store.commit([])

    @pytest.mark.asyncio
    async def test_transactions_are_serialized(self, store, make_item):
        """A second writer waits until the first one leaves its transaction"""
        events = []

        async def writer(name: str, product_id: str):
            async with store.transaction():
                events.append(f"{name}-start")
                current = store.read()
                await asyncio.sleep(0.01)
                store.commit(Cart(current.items + (make_item(product_id),)))
                events.append(f"{name}-end")

        await asyncio.gather(writer("a", "1"), writer("b", "2"))

        assert events == ["a-start", "a-end", "b-start", "b-end"]
        assert store.read().ids == ["1", "2"]
        assert store.revision == 2
