"""Process-wide read-through cache with a fixed time-to-live.

Used in front of read-heavy lookups such as the tenant directory. Entries are
refreshed lazily on miss or expiry; nothing is evicted otherwise because the
key space (tenants x lookups) is small.

Concurrent misses for the same key are not deduplicated: every waiter runs
its own fetch and the last one to finish wins. That thundering herd is an
accepted limitation.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the monotonic time at which it goes stale."""

    value: T
    expires_at: float


class ReadThroughCache(Generic[T]):
    """Caches the most recent successful fetch per key for ``ttl_seconds``."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry. Zero disables caching.
            clock: Monotonic clock in seconds.
        """
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    async def get(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[T | None]],
    ) -> T | None:
        """Return the cached value for ``key`` or fetch and cache it.

        A ``None`` result means "not found" and is not cached, so newly
        configured records become visible on the next request. Exceptions
        from ``fetcher`` propagate and leave any stale entry untouched.

        Args:
            key: Lookup key.
            fetcher: Coroutine factory that reads the authoritative source.

        Returns:
            The value, or None when the source has no record.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at > self._clock():
            return entry.value

        value = await fetcher()
        if value is None:
            self._entries.pop(key, None)
        elif self._ttl_seconds > 0:
            self._entries[key] = CacheEntry(
                value=value,
                expires_at=self._clock() + self._ttl_seconds,
            )
        return value

    def invalidate(self, key: str) -> None:
        """Drop a single entry."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
