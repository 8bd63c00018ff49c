"""
Caching utilities for calibration lookups.
"""

from typing import Any, Dict, Hashable, Optional, Protocol, Tuple
import threading
import time
import weakref
from collections import OrderedDict

from itcoptics.core.logging_config import get_logger

logger = get_logger("core.cache")


class LRUCache:
    """
    Least Recently Used (LRU) cache with size limit and TTL support.

    This cache automatically evicts least recently used items when
    the cache exceeds max_size, and expires items older than ttl_seconds.
    All operations are guarded by an internal lock, so one cache may be
    shared by concurrent readers.
    """

    def __init__(self, max_size: int = 128, ttl_seconds: Optional[float] = None):
        """
        Initialize LRU cache.

        Parameters
        ----------
        max_size : int
            Maximum number of items to cache
        ttl_seconds : float, optional
            Time-to-live in seconds. If None, items never expire.
        """
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.cache: "OrderedDict[Hashable, Tuple[Any, float]]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Get item from cache.

        Parameters
        ----------
        key : hashable
            Cache key

        Returns
        -------
        Any or None
            Cached value, or None if not found or expired
        """
        with self._lock:
            if key not in self.cache:
                self.misses += 1
                return None

            value, timestamp = self.cache[key]

            if self.ttl_seconds is not None:
                age = time.time() - timestamp
                if age > self.ttl_seconds:
                    del self.cache[key]
                    self.misses += 1
                    logger.debug(f"Cache entry expired: {key!r}")
                    return None

            self.cache.move_to_end(key)
            self.hits += 1
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """
        Set item in cache.

        Parameters
        ----------
        key : hashable
            Cache key
        value : Any
            Value to cache
        """
        with self._lock:
            if key in self.cache:
                self.cache.move_to_end(key)

            self.cache[key] = (value, time.time())

            if len(self.cache) > self.max_size:
                oldest_key = next(iter(self.cache))
                del self.cache[oldest_key]
                logger.debug(f"Evicted cache entry: {oldest_key!r}")

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self.cache

    def __len__(self) -> int:
        with self._lock:
            return len(self.cache)

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self.cache.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns
        -------
        dict
            Cache statistics
        """
        with self._lock:
            total = self.hits + self.misses
            hit_rate = self.hits / total if total > 0 else 0.0

            return {
                "size": len(self.cache),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": hit_rate,
            }


class ManagedCache(Protocol):
    """Anything the registry can report on and clear."""

    def stats(self) -> Dict[str, Any]: ...

    def clear(self) -> None: ...


# Named caches created by calibration sources; dropped when their owner goes away
_registry: "weakref.WeakValueDictionary[str, ManagedCache]" = weakref.WeakValueDictionary()
_registry_lock = threading.Lock()


def register_cache(name: str, cache: ManagedCache) -> ManagedCache:
    """
    Make a cache visible to get_cache_stats() and clear_all_caches().

    Parameters
    ----------
    name : str
        Registry key; an existing entry with the same name is replaced
    cache : LRUCache or any object with stats() and clear()
        Held weakly, so registering does not keep it alive
    """
    with _registry_lock:
        _registry[name] = cache
    return cache


def get_cache_stats() -> Dict[str, Dict[str, Any]]:
    """
    Get statistics for all registered caches.

    Returns
    -------
    dict
        Dictionary mapping cache name to statistics
    """
    with _registry_lock:
        caches = dict(_registry)
    return {name: cache.stats() for name, cache in caches.items()}


def clear_all_caches() -> None:
    """Clear all registered caches."""
    with _registry_lock:
        caches = list(_registry.values())
    for cache in caches:
        cache.clear()
    logger.info("All caches cleared")
