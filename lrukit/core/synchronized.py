"""
Thread-safe wrapper around LRUCache.

Every operation runs under a single re-entrant lock, so the wrapped cache
sees a strictly sequential stream of calls.
"""

import threading
from dataclasses import replace
from typing import Callable, Generic, Optional, Tuple

from lrukit.core.cache import K, V, CacheEntry, LRUCache
from lrukit.core.stats import CacheMetrics, CacheStats
from lrukit.utils.logging import MetricsLogger


class SynchronizedLRUCache(Generic[K, V]):
    """
    LRUCache guarded by a threading.RLock.

    Takes the same arguments as LRUCache. `get_or_compute` holds the lock
    while the factory runs, so concurrent misses on one key compute the value
    once. Keep factories short; they block every other caller.
    """

    def __init__(
        self,
        capacity: int,
        name: Optional[str] = None,
        on_evict: Optional[Callable[[K, V], None]] = None,
        metrics_logger: Optional[MetricsLogger] = None,
    ):
        self._cache: LRUCache[K, V] = LRUCache(
            capacity, name=name, on_evict=on_evict, metrics_logger=metrics_logger
        )
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    @property
    def name(self) -> str:
        return self._cache.name

    @property
    def access_counter(self) -> int:
        with self._lock:
            return self._cache.access_counter

    @property
    def size(self) -> int:
        with self._lock:
            return self._cache.size

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return self._cache.is_empty

    @property
    def is_full(self) -> bool:
        with self._lock:
            return self._cache.is_full

    @property
    def keys(self) -> Tuple[K, ...]:
        with self._lock:
            return self._cache.keys

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return self._cache.stats

    @property
    def metrics(self) -> CacheMetrics:
        """A copy of the counters, taken under the lock."""
        with self._lock:
            return replace(self._cache.metrics)

    def reset_metrics(self) -> None:
        with self._lock:
            self._cache.reset_metrics()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            return self._cache.get(key, default)

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._cache.put(key, value)

    def contains_key(self, key: K) -> bool:
        with self._lock:
            return self._cache.contains_key(key)

    def remove(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            return self._cache.remove(key, default)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            return self._cache.peek(key, default)

    def entry(self, key: K) -> Optional[CacheEntry[V]]:
        with self._lock:
            return self._cache.entry(key)

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        with self._lock:
            return self._cache.get_or_compute(key, factory)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def __repr__(self) -> str:
        with self._lock:
            return f"Synchronized{self._cache!r}"
