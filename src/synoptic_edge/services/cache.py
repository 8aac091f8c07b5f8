"""In-memory TTL cache with an injectable clock and expiry policy."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    timestamp: float
    expires_at: float


ExpiryPolicy = Callable[[CacheEntry, float], bool]


def expire_after_ttl(entry: CacheEntry, now: float) -> bool:
    return now >= entry.expires_at


class TTLCache:
    """Key/value store whose entries go stale after a per-entry TTL.

    Stale entries are kept (see :meth:`get_entry`) so callers can fall back to
    the last known good value when a refresh fails.
    """

    def __init__(
        self,
        *,
        time_fn: Callable[[], float] | None = None,
        is_expired: ExpiryPolicy | None = None,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._time = time_fn or time.time
        self._is_expired = is_expired or expire_after_ttl

    def get_entry(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def is_expired(self, entry: CacheEntry) -> bool:
        return self._is_expired(entry, self._time())

    def get(self, key: str) -> Any | None:
        """Return fresh data for ``key`` or ``None`` if missing or expired."""

        entry = self._entries.get(key)
        if entry is None or self.is_expired(entry):
            return None
        return entry.data

    def set(self, key: str, data: Any, ttl: float) -> CacheEntry:
        now = self._time()
        entry = CacheEntry(data=data, timestamp=now, expires_at=now + ttl)
        self._entries[key] = entry
        return entry

    def invalidate(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            logger.debug("Invalidated cache key %s", key)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
