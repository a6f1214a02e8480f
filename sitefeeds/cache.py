from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List, Protocol, Tuple, TypeVar

from . import config

T = TypeVar("T")


class CacheGate(Protocol):
    """
    get-or-populate keyed by string.

    Implementations run ``factory`` at most once per key while a value is
    fresh, even under concurrent callers. An exception from ``factory``
    propagates to the caller and nothing is stored for that key.
    """

    def get_or_populate(self, key: str, factory: Callable[[], T]) -> T: ...


class NullCache:
    def get_or_populate(self, key: str, factory: Callable[[], T]) -> T:
        return factory()


class MemoryCache:
    def __init__(self, ttl_seconds: float = config.CACHE_TTL_SEC, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._values: Dict[str, Tuple[float, Any]] = {}
        # key -> [lock, callers holding or waiting on it]; dropped when the count hits 0
        self._locks: Dict[str, List[Any]] = {}
        self._guard = threading.Lock()

    def _enter(self, key: str) -> threading.Lock:
        with self._guard:
            slot = self._locks.get(key)
            if slot is None:
                slot = self._locks[key] = [threading.Lock(), 0]
            slot[1] += 1
            return slot[0]

    def _leave(self, key: str) -> None:
        with self._guard:
            slot = self._locks.get(key)
            if slot is None:
                return
            slot[1] -= 1
            if slot[1] <= 0:
                del self._locks[key]

    def _fresh(self, key: str) -> Tuple[bool, Any]:
        hit = self._values.get(key)
        if hit is None:
            return False, None
        expires_at, value = hit
        if self._clock() >= expires_at:
            self._values.pop(key, None)
            return False, None
        return True, value

    def _purge_expired(self) -> None:
        now = self._clock()
        for k in [k for k, (expires_at, _v) in list(self._values.items()) if now >= expires_at]:
            self._values.pop(k, None)

    def get_or_populate(self, key: str, factory: Callable[[], T]) -> T:
        found, value = self._fresh(key)
        if found:
            return value

        # callers racing on the same key wait here; only the first one populates
        lock = self._enter(key)
        try:
            with lock:
                found, value = self._fresh(key)
                if found:
                    return value
                value = factory()
                self._purge_expired()
                self._values[key] = (self._clock() + self.ttl_seconds, value)
                return value
        finally:
            self._leave(key)

    def clear(self) -> None:
        with self._guard:
            self._values.clear()
            self._locks.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fresh(key)[0]

    def __len__(self) -> int:
        return len(self._values)
