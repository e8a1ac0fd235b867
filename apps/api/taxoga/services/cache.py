from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")


@dataclass
class _Entry:
    value: Any
    loaded_at: float


class ReferenceDataCache:
    """Process-local cache for reference data with a staleness window.

    Only successful loads are stored; a loader that raises leaves the
    previous entry (if any) untouched and the error propagates.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get_cached(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.loaded_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return entry.value

    def set_cached(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, loaded_at=self._clock())

    def get_or_load(self, key: str, loader: Callable[[], T]) -> T:
        cached = self.get_cached(key)
        if cached is not None:
            return cached
        value = loader()
        self.set_cached(key, value)
        return value
