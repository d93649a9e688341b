"""
Persistence gateway implementations
"""

from .in_memory_gateway import InMemoryPersistenceGateway
from .sqlalchemy_gateway import SQLAlchemyPersistenceGateway

__all__ = ["InMemoryPersistenceGateway", "SQLAlchemyPersistenceGateway"]
