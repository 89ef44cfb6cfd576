"""Process-wide read-through cache with prefix invalidation.

One instance is built by the composition root and shared by every store.
The cache is advisory: it may hold a stale value or run a loader twice
under concurrent misses.  Correctness (above all, stock never going
negative) comes from the database's conditional writes, never from here.

There is no eviction and no TTL; memory grows with the number of
distinct keys.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


class ApplicationCache:
    """Key/value memoization keyed by strings like ``"product:id:<uuid>"``.

    ``get_or_load`` caches whatever the loader returns, including ``None``
    and empty lists, so a lookup for something absent is not repeated on
    every call.  Loader exceptions propagate and nothing is stored.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._lock = threading.Lock()
        # Bumped on every invalidation so a load that overlapped one is
        # returned to its caller but not stored.
        self._generation = 0

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        with self._lock:
            value = self._entries.get(key, _MISSING)
            generation = self._generation
        if value is not _MISSING:
            return value  # type: ignore[return-value]

        logger.debug("cache_miss", key=key)
        # Runs outside the lock: concurrent misses on one key may both load.
        loaded = loader()

        with self._lock:
            if self._generation == generation:
                self._entries[key] = loaded
        return loaded

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value without loading, or ``default``."""
        with self._lock:
            return self._entries.get(key, default)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._generation += 1

    def invalidate_by_prefix(self, prefix: str) -> None:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            self._generation += 1
        if doomed:
            logger.debug("cache_invalidated", prefix=prefix, removed=len(doomed))

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()
            self._generation += 1

    # --- Introspection ----------------------------------------------------------

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
