"""
In-memory LRU cache with TTL support.

Used by the extractor registry to avoid resolving the same embed URL
again while its previous result is still valid.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Optional


@dataclass
class CacheEntry:
    """A single cache entry with metadata."""
    value: Any
    expires_at: float

    @property
    def is_expired(self) -> bool:
        """Check if entry has expired."""
        return time.monotonic() >= self.expires_at

    @property
    def ttl_remaining(self) -> float:
        """Get remaining TTL in seconds."""
        return max(0.0, self.expires_at - time.monotonic())


@dataclass
class CacheStats:
    """Cache statistics."""
    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0
    entry_count: int = 0


class MemoryCache:
    """
    Thread-safe in-memory LRU cache with TTL support.

    Features:
    - LRU eviction when max entries reached
    - Time-based expiration, checked on access
    """

    def __init__(self, max_entries: int = 1000, default_ttl: float = 60.0):
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self.stats = CacheStats()
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def _evict_lru(self) -> None:
        """Evict least recently used entries until under limit."""
        while self._cache and len(self._cache) >= self.max_entries:
            self._cache.popitem(last=False)
            self.stats.evictions += 1

    def _lookup(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self.stats.misses += 1
                return None

            if entry.is_expired:
                self._cache.pop(key)
                self.stats.misses += 1
                self.stats.entry_count = len(self._cache)
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            self.stats.hits += 1
            return entry

    async def get(self, key: str) -> Optional[Any]:
        """Get a value from cache."""
        entry = self._lookup(key)
        return entry.value if entry is not None else None

    async def get_with_ttl(self, key: str) -> Optional[tuple[Any, float]]:
        """Get a value together with its remaining lifetime in seconds."""
        entry = self._lookup(key)
        return (entry.value, entry.ttl_remaining) if entry is not None else None

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to store
            ttl: Lifetime in seconds, defaults to ``default_ttl``
        """
        if ttl is None:
            ttl = self.default_ttl
        if ttl <= 0:
            return

        entry = CacheEntry(value=value, expires_at=time.monotonic() + ttl)

        with self._lock:
            self._cache.pop(key, None)
            self._evict_lru()
            self._cache[key] = entry
            self.stats.sets += 1
            self.stats.entry_count = len(self._cache)

    async def delete(self, key: str) -> bool:
        """Delete a value from cache."""
        with self._lock:
            removed = self._cache.pop(key, None) is not None
            self.stats.entry_count = len(self._cache)
            return removed

    async def clear(self) -> int:
        """Clear all entries. Returns count of cleared entries."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self.stats.entry_count = 0
            return count
