"""
Persistence gateway interface

Defines the key-value contract the cart uses to survive process restarts.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PersistenceGateway(ABC):
    """Asynchronous key-value store holding opaque string values"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get the value stored under ``key``, or None when absent"""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; return False if the write was rejected"""
