"""Simple TTL cache with substring-pattern invalidation.

One TTL applies to the whole instance. Expired entries are evicted lazily on
``get`` or eagerly via ``cleanup``; there is no background timer. The cache is
a plain dict and is not safe for concurrent mutation from several threads.
"""

import time
from dataclasses import dataclass
from typing import Any

DEFAULT_TTL = 60.0  # seconds


@dataclass
class CacheEntry:
    value: Any
    timestamp: float


@dataclass
class CacheStats:
    """Snapshot of cache state. Ages are in seconds."""

    size: int
    ttl: float
    oldest_entry: float | None
    newest_entry: float | None


class SimpleCache:
    """Flat key/value cache where entries expire ``ttl`` seconds after being set."""

    def __init__(self, ttl: float = DEFAULT_TTL):
        self.ttl = ttl
        self._entries: dict[str, CacheEntry] = {}

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp > self.ttl

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._is_expired(entry, time.time()):
            del self._entries[key]
            return None

        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=time.time())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def invalidate_pattern(self, pattern: str) -> int:
        """
        Remove every key containing ``pattern`` as a substring.

        Returns:
            Number of entries removed
        """
        matching = [key for key in self._entries if pattern in key]
        for key in matching:
            del self._entries[key]
        return len(matching)

    def has(self, key: str) -> bool:
        """True if the key is present and not expired.

        A stored value of None counts as absent, same as ``get``.
        """
        return self.get(key) is not None

    def keys(self) -> list[str]:
        return list(self._entries)

    def size(self) -> int:
        return len(self._entries)

    def cleanup(self) -> int:
        """Evict all expired entries and return how many were removed."""
        now = time.time()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def get_stats(self) -> CacheStats:
        """Size and ages of live entries; expired ones not yet evicted are skipped."""
        now = time.time()
        timestamps = [
            entry.timestamp
            for entry in self._entries.values()
            if not self._is_expired(entry, now)
        ]
        return CacheStats(
            size=len(timestamps),
            ttl=self.ttl,
            oldest_entry=now - min(timestamps) if timestamps else None,
            newest_entry=now - max(timestamps) if timestamps else None,
        )
