# src/portfolio_accounting_engine/services/cache.py
"""
Key-value side-cache for the data the collaborators fetch (quotes, dividend
events, metadata). Staleness is decided by a predicate supplied at the call
site, so each caller states how old a value it is willing to use.
"""
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Optional, Protocol

StalenessPredicate = Callable[[float, float], bool]


class KeyValueStore(Protocol):
    def get(self, key: str, is_stale: Optional[StalenessPredicate] = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...
    def clear(self) -> None: ...


def max_age(seconds: float) -> StalenessPredicate:
    """Builds a predicate that marks entries older than `seconds` as stale."""
    def is_stale(stored_at: float, now: float) -> bool:
        return now - stored_at > seconds
    return is_stale


@dataclass
class _CacheItem:
    value: Any
    stored_at: float


class InMemoryKeyValueStore:
    """Thread-safe in-memory store keyed by string."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: dict[str, _CacheItem] = {}
        self._lock = Lock()

    def get(self, key: str, is_stale: Optional[StalenessPredicate] = None) -> Any:
        now = self._clock()
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            if is_stale is not None and is_stale(item.stored_at, now):
                self._data.pop(key, None)
                return None
            return item.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = _CacheItem(value=value, stored_at=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
