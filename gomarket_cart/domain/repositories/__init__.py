"""
Domain repository interfaces

Contains abstract interfaces that define contracts for data access.
"""

from .persistence_gateway import PersistenceGateway

__all__ = [
    'PersistenceGateway'
]
