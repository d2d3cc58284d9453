"""
Fixed-capacity least-recently-used cache.

Entries live in an OrderedDict kept in recency order (least recently touched
first), so marking an entry as most recent and evicting the least recent one
are both O(1). Each entry also carries the value of a per-cache access
counter taken at its last touch; the OrderedDict order and the counter order
always agree.

The cache is not thread-safe. Share it across threads through
`SynchronizedLRUCache` or an external lock.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, replace
from typing import Callable, Generic, Hashable, Optional, Tuple, TypeVar

from lrukit.core.stats import CacheMetrics, CacheStats
from lrukit.utils.logging import MetricsLogger
from lrukit.utils.validation import (
    ensure_callable_or_none,
    validate_callable,
    validate_capacity,
    validate_name,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger(__name__)

CACHE_TYPE = "lru"


@dataclass
class CacheEntry(Generic[V]):
    """
    A value held by one cache.

    Attributes:
        value: The stored value
        last_access_time: Access counter value at the most recent get/put of this key
    """
    value: V
    last_access_time: int


class LRUCache(Generic[K, V]):
    """
    Bounded mapping that evicts the least recently used entry when full.

    A `get` or `put` touching a key makes it the most recently used.
    `contains_key`, `peek`, `entry`, `keys` and `stats` never change recency.
    A miss is a normal outcome: `get` and `remove` return `default` and never
    raise for an absent key.

    Args:
        capacity: Maximum number of entries, must be a positive integer
        name: Optional name used in log records
        on_evict: Optional callback ``on_evict(key, value)`` run after an
            eviction, once the new entry has been inserted
        metrics_logger: Optional MetricsLogger receiving hit, miss and
            eviction events

    Raises:
        InvalidArgumentError: If capacity is not a positive integer.
    """

    def __init__(
        self,
        capacity: int,
        name: Optional[str] = None,
        on_evict: Optional[Callable[[K, V], None]] = None,
        metrics_logger: Optional[MetricsLogger] = None,
    ):
        validate_capacity(capacity)
        validate_name(name)
        ensure_callable_or_none(on_evict, "on_evict")

        self._capacity = capacity
        self._name = name or f"LRUCache-{id(self):x}"
        self._on_evict = on_evict
        self._metrics_logger = metrics_logger

        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()
        self._access_counter = 0
        self._metrics = CacheMetrics()

        logger.debug("Created cache %s with capacity %d", self._name, capacity)

    # Read-only properties

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def name(self) -> str:
        return self._name

    @property
    def access_counter(self) -> int:
        """Counter value handed to the most recently touched entry (0 after clear)."""
        return self._access_counter

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def is_full(self) -> bool:
        return len(self._entries) == self._capacity

    @property
    def keys(self) -> Tuple[K, ...]:
        """
        Current keys, for diagnostics only.

        The order is not part of the cache's contract.
        """
        return tuple(self._entries)

    @property
    def stats(self) -> CacheStats:
        """Utilization snapshot computed from the current entries."""
        size = len(self._entries)
        return CacheStats(size=size, max_size=self._capacity, is_full=size == self._capacity)

    @property
    def metrics(self) -> CacheMetrics:
        """Operation counters accumulated since creation or the last reset_metrics()."""
        return self._metrics

    def reset_metrics(self) -> None:
        self._metrics.reset()

    # Core operations

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """
        Look up a key and mark it as most recently used.

        Args:
            key: The key to look up.
            default: Value returned when the key is absent.

        Returns:
            The cached value, or default if the key is not present.
        """
        entry = self._entries.get(key)
        if entry is None:
            self._record_miss(key)
            return default

        self._touch(key, entry)
        self._record_hit(key)
        return entry.value

    def put(self, key: K, value: V) -> None:
        """
        Store a value, evicting the least recently used entry if a new key
        would exceed capacity.

        Overwriting an existing key refreshes its recency and never evicts.

        Args:
            key: The key to store.
            value: The value to store. None is a valid value.
        """
        entry = self._entries.get(key)
        if entry is not None:
            entry.value = value
            self._touch(key, entry)
            self._metrics.updates += 1
            return

        evicted = None
        if len(self._entries) >= self._capacity:
            evicted = self._evict_least_recent()

        self._access_counter += 1
        self._entries[key] = CacheEntry(value=value, last_access_time=self._access_counter)
        self._metrics.insertions += 1

        if evicted is not None and self._on_evict is not None:
            self._on_evict(evicted[0], evicted[1].value)

    def contains_key(self, key: K) -> bool:
        """Check whether a key is present without changing its recency."""
        return key in self._entries

    def remove(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """
        Delete a key.

        Args:
            key: The key to delete.
            default: Value returned when the key is absent.

        Returns:
            The removed value, or default if the key was not present.
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return default

        self._metrics.removals += 1
        return entry.value

    def clear(self) -> None:
        """Drop every entry and reset the access counter."""
        dropped = len(self._entries)
        self._entries.clear()
        self._access_counter = 0
        logger.debug("Cleared cache %s (%d entries dropped)", self._name, dropped)

    # Supplementary operations

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Read a value without changing recency or metrics."""
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def entry(self, key: K) -> Optional[CacheEntry[V]]:
        """Return a copy of the entry for a key, or None. Does not change recency."""
        entry = self._entries.get(key)
        return None if entry is None else replace(entry)

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        """
        Return the cached value for key, computing and storing it on a miss.

        Absence means "not yet computed": the factory is called with the key,
        its result is put into the cache and returned. If the factory raises,
        nothing is stored and the exception propagates.

        Args:
            key: The key to look up.
            factory: Callable producing the value for a missing key.

        Returns:
            The cached or freshly computed value.
        """
        validate_callable(factory, "factory")

        entry = self._entries.get(key)
        if entry is not None:
            self._touch(key, entry)
            self._record_hit(key)
            return entry.value

        self._record_miss(key)
        value = factory(key)
        self.put(key, value)
        return value

    # Internals

    def _touch(self, key: K, entry: CacheEntry[V]) -> None:
        self._access_counter += 1
        entry.last_access_time = self._access_counter
        self._entries.move_to_end(key)

    def _evict_least_recent(self) -> Tuple[K, CacheEntry[V]]:
        # Front of the OrderedDict holds the minimum last_access_time
        key, entry = self._entries.popitem(last=False)
        self._metrics.evictions += 1
        logger.debug(
            "Evicted key %r from cache %s (last access %d)",
            key,
            self._name,
            entry.last_access_time,
        )
        if self._metrics_logger is not None:
            self._metrics_logger.log_cache_eviction(
                CACHE_TYPE, str(key), cache_name=self._name, capacity=self._capacity
            )
        return key, entry

    def _record_hit(self, key: K) -> None:
        self._metrics.hits += 1
        if self._metrics_logger is not None:
            self._metrics_logger.log_cache_hit(CACHE_TYPE, str(key), cache_name=self._name)

    def _record_miss(self, key: K) -> None:
        self._metrics.misses += 1
        if self._metrics_logger is not None:
            self._metrics_logger.log_cache_miss(CACHE_TYPE, str(key), cache_name=self._name)

    # Python protocol support

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"LRUCache(name={self._name!r}, size={len(self._entries)}, capacity={self._capacity})"
