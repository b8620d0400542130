"""
Storage Interface - Abstract key-value store used for chat history and users.
Implementations: LocalKVStore (JSON files) and SupabaseKVStore (PostgREST table).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class KVStore(ABC):
    """
    Opaque key -> JSON value store.

    All methods raise ``StorageError`` when the backend cannot complete the
    operation. Deleting a missing key is not an error.
    """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: Store key (e.g., "chat:<user_id>:<chat_id>")
            value: JSON-serializable value
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Fetch the value stored under ``key``.

        Returns:
            The stored value, or None if the key does not exist
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    async def get_by_prefix(self, prefix: str) -> List[Dict[str, Any]]:
        """
        Scan all keys starting with ``prefix``.

        Returns:
            List of ``{"key": ..., "value": ...}`` dicts ordered by key
        """

    async def mset(self, items: Dict[str, Any]) -> None:
        """Store several key/value pairs."""
        for key, value in items.items():
            await self.set(key, value)

    async def mget(self, keys: List[str]) -> List[Optional[Any]]:
        """Fetch several keys; missing keys yield None at their position."""
        return [await self.get(key) for key in keys]

    async def mdel(self, keys: List[str]) -> None:
        """Delete several keys."""
        for key in keys:
            await self.delete(key)
