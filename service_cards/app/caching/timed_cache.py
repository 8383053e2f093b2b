"""
Single-entry time-boxed cache.

A ``TimedCache`` holds at most one payload together with the time it was
stored. Reads return the payload while it is younger than the TTL and
``None`` otherwise; nothing is evicted on expiry, the entry simply stops
being served until it is replaced or invalidated.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """Immutable payload/timestamp pair; swapped as a whole on every write."""

    payload: Any = None
    stored_at: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.payload is None


EMPTY_ENTRY = CacheEntry()


class CacheState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


class TimedCache:
    """Thread-safe single-entry cache with a fixed TTL."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        name: str = "default",
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._entry = EMPTY_ENTRY

    def snapshot(self) -> CacheEntry:
        """Return the current entry without judging its freshness."""
        with self._lock:
            return self._entry

    def get(self) -> Optional[Any]:
        """Return the stored payload if it is still fresh, else ``None``."""
        entry = self.snapshot()
        if self.is_fresh(entry):
            return entry.payload
        return None

    def store(self, payload: Any) -> CacheEntry:
        """Replace the entry with ``payload`` stamped with the current time."""
        with self._lock:
            self._entry = CacheEntry(payload=payload, stored_at=self._clock())
            return self._entry

    def invalidate(self) -> None:
        """Drop the entry regardless of its freshness."""
        with self._lock:
            self._entry = EMPTY_ENTRY

    def state(self) -> CacheState:
        return self.state_of(self.snapshot())

    def age(self) -> Optional[float]:
        """Seconds since the current payload was stored, ``None`` when empty."""
        return self.age_of(self.snapshot())

    def is_fresh(self, entry: CacheEntry) -> bool:
        if entry.is_empty:
            return False
        return self._clock() - entry.stored_at < self.ttl_seconds

    def state_of(self, entry: CacheEntry) -> CacheState:
        if entry.is_empty:
            return CacheState.EMPTY
        return CacheState.FRESH if self.is_fresh(entry) else CacheState.STALE

    def age_of(self, entry: CacheEntry) -> Optional[float]:
        if entry.is_empty:
            return None
        return max(0.0, self._clock() - entry.stored_at)

    def __repr__(self) -> str:
        return f"TimedCache(name={self.name!r}, ttl_seconds={self.ttl_seconds}, state={self.state().value})"
