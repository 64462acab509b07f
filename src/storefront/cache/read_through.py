"""Read-through cache with TTL and explicit invalidation.

Entries live in Protean's ``TTLDict`` so expiry is passive: an expired key is
dropped on access and the next read falls through to the loader. TTL only
bounds staleness; write paths invalidate explicitly (see
``storefront.cache.invalidation``).

A load that overlaps an invalidation does not store its result. Each
invalidation bumps a generation counter, and ``get_or_load`` only writes back
when the generation it started with is still current, so a reader that
fetched pre-commit state cannot park it in the cache after the writer has
invalidated.
"""

import copy
import threading
from collections.abc import Callable
from typing import Any

import structlog
from protean.adapters.cache.memory import TTLDict

logger = structlog.get_logger(__name__)

_MISSING = object()


class ReadThroughCache:
    """Get-or-populate cache shared by every request in the process."""

    def __init__(self, default_ttl: float = 60) -> None:
        self.default_ttl = default_ttl
        self._store = TTLDict(default_ttl)
        self._lock = threading.RLock()
        self._generation = 0
        self.hits = 0
        self.misses = 0

    def get(self, key: str, default: Any = None) -> Any:
        value = self._store.get(key, _MISSING)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            self._store[key] = copy.deepcopy(value)
            if ttl is not None and ttl != self.default_ttl:
                self._store.set_ttl(key, ttl)

    def get_or_load(self, key: str, loader: Callable[[], Any], ttl: float | None = None) -> Any:
        """Return the cached value for ``key``, loading and storing it on a miss.

        The loader's exceptions propagate and nothing is cached for that key.
        """
        with self._lock:
            value = self._store.get(key, _MISSING)
            if value is not _MISSING:
                self.hits += 1
                return copy.deepcopy(value)
            self.misses += 1
            generation = self._generation

        value = loader()

        with self._lock:
            if generation == self._generation:
                self.set(key, value, ttl)
            else:
                logger.debug("Skipping cache fill after concurrent invalidation", key=key)

        return copy.deepcopy(value)

    def invalidate(self, *keys: str) -> None:
        with self._lock:
            self._generation += 1
            for key in keys:
                self._store.pop(key, None)
        logger.debug("Cache keys invalidated", keys=list(keys))

    def invalidate_prefix(self, *prefixes: str) -> None:
        with self._lock:
            self._generation += 1
            doomed = [key for key in list(self._store.keys()) if key.startswith(prefixes)]
            for key in doomed:
                self._store.pop(key, None)
        logger.debug("Cache prefixes invalidated", prefixes=list(prefixes), removed=len(doomed))

    def ttl_of(self, key: str) -> float:
        """Seconds left before ``key`` expires."""
        return self._store.get_ttl(key)

    def keys(self) -> list[str]:
        return list(self._store.keys())

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._store.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
