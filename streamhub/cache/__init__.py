"""
Caching for StreamHub.
"""

from streamhub.cache.memory import CacheEntry, CacheStats, MemoryCache

__all__ = [
    "CacheEntry",
    "CacheStats",
    "MemoryCache",
]
