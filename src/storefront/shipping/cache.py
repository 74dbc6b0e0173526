"""Time-bounded memo of carrier rate lookups.

Entries are immutable once written; a refresh simply replaces the entry
(last writer wins). Expired entries read as absent. When the soft size
bound is exceeded a single pass drops every expired entry; there is no
LRU ordering.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

from storefront.shipping.port import PackageSpec

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Entry(Generic[T]):
    value: T
    stored_at: float


def rate_cache_key(origin_zip: str, dest_zip: str, package: PackageSpec) -> str:
    return f"{origin_zip}-{dest_zip}-{package.weight_lb}-{package.dims_key}"


class RateCache(Generic[T]):
    def __init__(
        self,
        ttl_seconds: float = 600.0,
        soft_limit: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.soft_limit = soft_limit
        self._clock = clock
        self._entries: dict[str, _Entry[T]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: _Entry[T], now: float) -> bool:
        return (now - entry.stored_at) < self.ttl_seconds

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not self._is_fresh(entry, self._clock()):
                del self._entries[key]
                return None
            return entry.value

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, stored_at=self._clock())
            if len(self._entries) > self.soft_limit:
                self._sweep_locked()

    def sweep(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            return self._sweep_locked()

    def _sweep_locked(self) -> int:
        now = self._clock()
        stale = [key for key, entry in self._entries.items() if not self._is_fresh(entry, now)]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Swept stale shipping rates", removed=len(stale), remaining=len(self._entries))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
