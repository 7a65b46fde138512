"""
CacheManager - Async-compatible in-memory cache with per-entry TTL.

Features:
- Memory-based store keyed by plain strings
- TTL (Time To Live) evaluated at read time, no background sweep
- Safe for concurrent coroutines (single asyncio.Lock)
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with metadata."""

    data: T
    timestamp: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        return self.timestamp + self.ttl

    def is_expired(self, now: datetime) -> bool:
        """Check if entry has reached its TTL."""
        return now >= self.expires_at


class CacheManager:
    """
    Async-compatible cache manager with TTL expiry.

    Usage:
        cache = CacheManager(default_ttl=timedelta(minutes=5))

        # Try to get from cache
        user = await cache.get("user_1")
        if user is not None:
            return user

        # Fetch fresh data and cache it
        user = await fetch_user(1)
        await cache.set("user_1", user, ttl=timedelta(minutes=5))
    """

    def __init__(
        self,
        default_ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = datetime.now,
        debug: bool = False,
    ):
        self._memory: dict[str, CacheEntry[Any]] = {}
        self._default_ttl = default_ttl
        self._clock = clock
        self._debug = debug
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    async def get(self, key: str) -> Any | None:
        """
        Get value from cache.

        Returns the cached value if present and not expired, None otherwise.
        """
        async with self._lock:
            entry = self._memory.get(key)
            if entry is None:
                self._stats.misses += 1
                self._log(f"MISS: {key}")
                return None

            if entry.is_expired(self._clock()):
                del self._memory[key]
                self._stats.misses += 1
                self._log(f"EXPIRED: {key}")
                return None

            self._stats.hits += 1
            self._log(f"HIT: {key}")
            return entry.data

    async def set(self, key: str, data: Any, ttl: timedelta | None = None) -> None:
        """
        Set value in cache, replacing any previous entry for the key.

        Args:
            key: Cache key
            data: Data to cache
            ttl: Time to live (uses default if not specified)
        """
        ttl = self._default_ttl if ttl is None else ttl
        entry = CacheEntry(data=data, timestamp=self._clock(), ttl=ttl)

        async with self._lock:
            self._memory[key] = entry
            self._log(f"SET: {key} (TTL: {ttl.total_seconds()}s)")

    async def delete(self, key: str) -> bool:
        """Delete a specific key from cache."""
        async with self._lock:
            if key in self._memory:
                del self._memory[key]
                self._log(f"DELETE: {key}")
                return True
            return False

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            count = len(self._memory)
            self._memory.clear()
            self._log(f"CLEAR: {count} entries removed")

    async def get_stats(self) -> "CacheStats":
        """Get a snapshot of cache statistics."""
        async with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                size=len(self._memory),
            )

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[CacheManager] {message}")


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

