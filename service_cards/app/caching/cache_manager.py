"""
Record cache manager for the card records service.
"""

import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from shared.logging import get_logger
from ..domain.tables import TableType
from .timed_cache import DEFAULT_TTL_SECONDS, TimedCache

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


class CacheManager:
    """One ``TimedCache`` per table type plus the read-through policy around it."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        metrics: Optional["MetricsCollector"] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.metrics = metrics
        self.logger = get_logger("cards.cache_manager")
        self._caches: Dict[TableType, TimedCache] = {
            table_type: TimedCache(ttl_seconds, clock=clock, name=table_type.value)
            for table_type in TableType
        }

    def cache_for(self, table_type: TableType) -> TimedCache:
        return self._caches[table_type]

    def get(self, table_type: TableType) -> Optional[Any]:
        """Return the fresh record set for ``table_type`` or ``None`` on a miss."""
        cache = self._caches[table_type]
        # Freshness, age and state all come from this one entry
        entry = cache.snapshot()

        if cache.is_fresh(entry):
            age = cache.age_of(entry)
            self.logger.debug("Record cache hit", table=table_type.value, age_seconds=age)
            self._increment("cache_hits_total", table_type)
            if self.metrics:
                self.metrics.set_gauge("cache_entry_age_seconds", age, table=table_type.value)
            return entry.payload

        self.logger.debug("Record cache miss", table=table_type.value, state=cache.state_of(entry).value)
        self._increment("cache_misses_total", table_type)
        return None

    def store(self, table_type: TableType, payload: Any) -> None:
        self._caches[table_type].store(payload)
        self.logger.info("Record cache stored", table=table_type.value, ttl_seconds=self.ttl_seconds)

    def invalidate(self, table_type: Optional[TableType] = None) -> List[TableType]:
        """Clear one table's cache, or every cache when ``table_type`` is None."""
        targets = [table_type] if table_type is not None else list(self._caches)
        for target in targets:
            self._caches[target].invalidate()
            self._increment("cache_invalidations_total", target)

        self.logger.info("Record cache invalidated", tables=[t.value for t in targets])
        return targets

    async def get_or_fetch(
        self,
        table_type: TableType,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Tuple[Any, bool]:
        """
        Serve ``table_type`` from cache, falling back to ``fetch`` on a miss.

        Returns ``(payload, cached)``. The fetch runs outside the cache lock;
        if it raises, the exception propagates and the cache is left as it
        was. Concurrent misses may each fetch, in which case the last store
        wins.
        """
        cached = self.get(table_type)
        if cached is not None:
            return cached, True

        payload = await fetch()
        self.store(table_type, payload)
        return payload, False

    def stats(self) -> Dict[str, Any]:
        """Per-table cache state for the stats endpoint."""
        tables: Dict[str, Any] = {}
        for table_type, cache in self._caches.items():
            entry = cache.snapshot()
            age = cache.age_of(entry)
            tables[table_type.value] = {
                "state": cache.state_of(entry).value,
                "age_seconds": round(age, 3) if age is not None else None,
                "ttl_seconds": cache.ttl_seconds,
            }
        return {"ttl_seconds": self.ttl_seconds, "tables": tables}

    def _increment(self, metric_name: str, table_type: TableType) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, table=table_type.value)
