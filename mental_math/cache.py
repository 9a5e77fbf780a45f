"""Small bounded mapping used to memoise factorizations."""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

__all__ = ["BoundedCache"]

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_POLICIES = ("fifo", "lru")


class BoundedCache(Generic[K, V]):
    """Thread-safe mapping holding at most ``capacity`` entries.

    With ``policy="fifo"`` (the default) the oldest inserted key is evicted
    and lookups do not refresh entries. ``policy="lru"`` moves a key to the
    back on every hit.
    """

    def __init__(self, capacity: int = 1000, policy: str = "fifo") -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        if policy not in _POLICIES:
            raise ValueError(f"unknown eviction policy {policy!r}; expected one of {_POLICIES}")
        self.capacity = capacity
        self.policy = policy
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                self.misses += 1
                return None
            self.hits += 1
            if self.policy == "lru":
                self._data.move_to_end(key)
            return self._data[key]

    def put(self, key: K, value: V) -> None:
        with self._lock:
            if key in self._data:
                self._data[key] = value
                if self.policy == "lru":
                    self._data.move_to_end(key)
                return
            while len(self._data) >= self.capacity:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("cache full (%d); evicted %r", self.capacity, evicted)
            self._data[key] = value

    def get_or_compute(self, key: K, compute: Callable[[K], V]) -> V:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute(key)
        self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = self.misses = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
