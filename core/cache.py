# core/cache.py

"""
In-process TTL cache.

Holds short-lived values such as the election record fetched from the
backend (re-fetched every refresh interval) and the permission-log
throttle markers. Entries are per process; nothing is shared between
workers.
"""

import time
from functools import wraps
from typing import Optional, Any, Callable
from threading import Lock
from core.logging_config import logger


class CacheEntry:
    """A cached value with a monotonic expiry."""

    def __init__(self, value: Any, ttl_seconds: float):
        self.value = value
        self.expires_at = time.monotonic() + ttl_seconds

    def is_expired(self) -> bool:
        return time.monotonic() >= self.expires_at


class SimpleCache:
    """
    TTL cache guarded by a lock so request threads and scheduler
    threads can share it.
    """

    def __init__(self):
        self._cache: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._cache[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float = 30):
        with self._lock:
            self._remove_expired()
            self._cache[key] = CacheEntry(value, ttl_seconds)

    def delete(self, key: str):
        with self._lock:
            self._cache.pop(key, None)

    def clear(self):
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self):
        """Remove all expired entries from the cache."""
        with self._lock:
            self._remove_expired()

    def _remove_expired(self):
        # Caller holds the lock
        expired_keys = [
            key for key, entry in self._cache.items()
            if entry.is_expired()
        ]
        for key in expired_keys:
            del self._cache[key]

    def size(self) -> int:
        with self._lock:
            return len(self._cache)


# Global cache instance
_cache = SimpleCache()


def get_cache() -> SimpleCache:
    return _cache


def cached(ttl_seconds: float = 30, key_prefix: str = ""):
    """
    Cache a function's result for `ttl_seconds`. None results are not cached.

    Example:
        @cached(ttl_seconds=30, key_prefix="election")
        def fetch_election_record():
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = f"{key_prefix}:{func.__name__}:{args!r}:{sorted(kwargs.items())!r}"

            cached_value = _cache.get(cache_key)
            if cached_value is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached_value

            result = func(*args, **kwargs)
            if result is not None:
                _cache.set(cache_key, result, ttl_seconds)
                logger.debug(f"Cache miss, stored: {cache_key}")

            return result

        return wrapper
    return decorator


def cache_get(key: str) -> Optional[Any]:
    return _cache.get(key)


def cache_set(key: str, value: Any, ttl_seconds: float = 30):
    _cache.set(key, value, ttl_seconds)


def cache_delete(key: str):
    _cache.delete(key)


def cache_clear():
    """Clear all cache entries."""
    _cache.clear()
