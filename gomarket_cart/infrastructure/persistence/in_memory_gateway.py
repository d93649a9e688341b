"""
In-memory persistence gateway
"""

import logging
from typing import Any, Dict, Mapping, Optional

from gomarket_cart.domain.repositories.persistence_gateway import PersistenceGateway


class InMemoryPersistenceGateway(PersistenceGateway):
    """Dict-backed key-value store; contents live as long as the instance"""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._stats = {
            "gets": 0,
            "hits": 0,
            "sets": 0,
        }
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get(self, key: str) -> Optional[str]:
        self._stats["gets"] += 1
        value = self._data.get(key)
        if value is not None:
            self._stats["hits"] += 1
        return value

    async def set(self, key: str, value: str) -> bool:
        if not isinstance(value, str):
            self._logger.warning("Rejected non-string value for key '%s'", key)
            return False

        self._data[key] = value
        self._stats["sets"] += 1
        return True

    def dump(self) -> Dict[str, str]:
        """Copy of everything stored"""
        return dict(self._data)

    def get_stats(self) -> Dict[str, Any]:
        """Get access statistics"""
        return {**self._stats, "size": len(self._data)}
