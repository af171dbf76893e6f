"""Cache port - Injectable caching abstraction.

Used by the geodata adapter to avoid re-querying the service for a
region it already fetched.
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementation: adapters/cache/memory_cache.py (InMemoryCache)
    """

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if absent or expired."""
        ...

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store a value, optionally with its own time-to-live."""
        ...

    def invalidate(self, key: str) -> bool:
        """Drop one entry; True if it existed."""
        ...

    def clear(self) -> int:
        """Drop every entry and return how many there were."""
        ...
