"""
Simple in-memory cache with TTL support, scoped to one table session.
"""
import time
from typing import Optional, Any, Dict, Tuple


class MemoryCache:
    """
    An in-memory cache with a time-to-live (TTL).

    Each controller owns its own instance, so nothing outlives the session.
    """

    def __init__(self, ttl: int = 300):
        """
        Initialize the cache.

        Args:
            ttl: Default time-to-live for cache entries in seconds.
        """
        self._cache: Dict[str, Tuple[Any, float]] = {}
        self.default_ttl = ttl

    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve an item from the cache.

        Args:
            key: The key of the item to retrieve.

        Returns:
            The cached item, or None if the item is not found or expired.
        """
        if key not in self._cache:
            return None

        value, expiry = self._cache[key]

        if time.time() > expiry:
            del self._cache[key]
            return None

        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None):
        """
        Add an item to the cache.

        Args:
            key: The key of the item to add.
            value: The item to add to the cache.
            ttl: Time-to-live for this specific entry. If None, use default.
        """
        ttl_to_use = ttl if ttl is not None else self.default_ttl
        self._cache[key] = (value, time.time() + ttl_to_use)

    def contains(self, key: str) -> bool:
        return self.get(key) is not None
