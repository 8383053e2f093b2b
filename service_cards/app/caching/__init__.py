"""
Record caching package.

Keeps the last fetched record set per table in process memory for a fixed
TTL so repeated page loads do not hit the upstream table store. Writers
force a refetch through explicit invalidation.
"""

from .cache_manager import CacheManager
from .timed_cache import CacheEntry, CacheState, DEFAULT_TTL_SECONDS, TimedCache

__all__ = [
    "CacheEntry",
    "CacheManager",
    "CacheState",
    "DEFAULT_TTL_SECONDS",
    "TimedCache",
]
