"""Cache adapters - Implementations of CachePort."""

from .memory_cache import InMemoryCache

__all__ = ["InMemoryCache"]
