"""Process-wide read-through cache.

Read paths receive the cache explicitly (FastAPI dependency or argument);
``get_cache()`` is the default they fall back to, and the instance that the
invalidation handlers clear.
"""

from storefront.cache.read_through import ReadThroughCache

_current_cache: ReadThroughCache | None = None


def get_cache() -> ReadThroughCache:
    """Return the shared cache, creating it with the configured TTL on first use."""
    global _current_cache
    if _current_cache is None:
        from storefront.config import get_settings

        _current_cache = ReadThroughCache(default_ttl=get_settings().cache_ttl_seconds)
    return _current_cache


def set_cache(cache: ReadThroughCache) -> None:
    """Override the shared cache (useful for tests)."""
    global _current_cache
    _current_cache = cache


def reset_cache() -> None:
    """Drop the shared cache; the next ``get_cache()`` builds a fresh one."""
    global _current_cache
    _current_cache = None
