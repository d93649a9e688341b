"""
Cart API

Facade handed to presentation code. It must be initialized (which hydrates
the cart from storage) before the cart can be read or changed.
"""

from enum import Enum

from gomarket_cart.application.services.cart_service import CartService, ProductInput
from gomarket_cart.domain.entities.cart import Cart
from gomarket_cart.infrastructure.logging.logger_config import get_structured_logger
from gomarket_cart.infrastructure.utilities.exceptions import CartConfigurationError


class CartState(Enum):
    """Lifecycle states of the cart API"""

    NEW = "new"
    READY = "ready"
    DISPOSED = "disposed"


class CartAPI:
    """
    Boundary exposed to callers: the current cart plus its three mutations

    Usage:
        api = CartAPI(service)
        await api.init()
        await api.add_to_cart(product)
        items = api.products
        await api.dispose()

    or ``async with CartAPI(service) as api: ...``
    """

    def __init__(self, service: CartService):
        self._service = service
        self._state = CartState.NEW
        self._logger = get_structured_logger(self.__class__.__name__)

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is CartState.READY

    async def init(self) -> "CartAPI":
        """Hydrate the cart; must complete before any other call"""
        if self._state is not CartState.NEW:
            raise CartConfigurationError(
                f"CartAPI.init() can only be called once (state: {self._state.value})"
            )

        await self._service.hydrate()
        self._state = CartState.READY
        self._logger.info("cart_api_ready", items=len(self._service.snapshot()))
        return self

    async def dispose(self) -> None:
        """Stop accepting calls; safe to call more than once"""
        if self._state is CartState.DISPOSED:
            return

        self._state = CartState.DISPOSED
        self._logger.info("cart_api_disposed", unsaved=self._service.is_dirty)

    @property
    def products(self) -> Cart:
        """Current cart snapshot"""
        self._ensure_ready("products")
        return self._service.snapshot()

    async def add_to_cart(self, item: ProductInput) -> Cart:
        self._ensure_ready("add_to_cart")
        return await self._service.add_to_cart(item)

    async def increment(self, product_id: str) -> Cart:
        self._ensure_ready("increment")
        return await self._service.increment(product_id)

    async def decrement(self, product_id: str) -> Cart:
        self._ensure_ready("decrement")
        return await self._service.decrement(product_id)

    def _ensure_ready(self, operation: str) -> None:
        if self._state is CartState.NEW:
            raise CartConfigurationError(
                f"CartAPI.{operation} used before init(); await CartAPI.init() first"
            )
        if self._state is CartState.DISPOSED:
            raise CartConfigurationError(
                f"CartAPI.{operation} used after dispose()"
            )

    async def __aenter__(self) -> "CartAPI":
        return await self.init()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()
