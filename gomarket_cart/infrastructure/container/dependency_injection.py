"""
Dependency Injection Container

Builds the gateway, store, service and API for one cart. Nothing here is a
global singleton: each container owns its own cart.
"""

import logging
from typing import Any, Dict, Optional

from ...application.cart_api import CartAPI
from ...application.serialization.snapshot_codec import SnapshotCodec
from ...application.services.cart_service import CartService
from ...application.stores.cart_store import CartStore
from ...domain.repositories.persistence_gateway import PersistenceGateway
from ..configuration.config import Settings, get_config
from ..persistence.in_memory_gateway import InMemoryPersistenceGateway
from ..persistence.sqlalchemy_gateway import SQLAlchemyPersistenceGateway
from ..utilities.constants import StorageSettings


class DependencyContainer:
    """
    Dependency injection container

    Manages the instantiation of:
    - The persistence gateway (Infrastructure layer)
    - The cart store, service and API (Application layer)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[PersistenceGateway] = None,
    ):
        self._settings = settings or get_config()
        self._instances: Dict[str, Any] = {}
        self._logger = logging.getLogger(self.__class__.__name__)
        self._setup_dependencies(gateway)

    def _setup_dependencies(self, gateway: Optional[PersistenceGateway]):
        """Setup all dependencies and their relationships"""
        self._logger.info("Setting up dependency injection container...")

        self._instances["gateway"] = gateway or self._build_gateway()
        self._instances["cart_store"] = CartStore()
        self._instances["cart_service"] = CartService(
            store=self.get_cart_store(),
            gateway=self.get_gateway(),
            storage_key=self._settings.storage_key,
            codec=SnapshotCodec(),
        )
        self._instances["cart_api"] = CartAPI(self.get_cart_service())

        self._logger.info(
            "Dependency injection container setup complete (backend: %s)",
            type(self.get_gateway()).__name__,
        )

    def _build_gateway(self) -> PersistenceGateway:
        """Create the gateway selected by configuration"""
        if self._settings.storage_backend == StorageSettings.SQLALCHEMY_BACKEND:
            gateway = SQLAlchemyPersistenceGateway(self._settings.database_url)
            gateway.create_tables()
            return gateway

        return InMemoryPersistenceGateway()

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_gateway(self) -> PersistenceGateway:
        """Get persistence gateway instance"""
        return self._instances["gateway"]

    def get_cart_store(self) -> CartStore:
        """Get cart store instance"""
        return self._instances["cart_store"]

    def get_cart_service(self) -> CartService:
        """Get cart service instance"""
        return self._instances["cart_service"]

    def get_cart_api(self) -> CartAPI:
        """Get cart API instance"""
        return self._instances["cart_api"]
