"""
Unit tests for the single-entry timed cache.
"""

import itertools
import threading

import pytest

from service_cards.app.caching.timed_cache import CacheEntry, CacheState, TimedCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestTimedCache:
    """Test cases for TimedCache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return TimedCache(300, clock=clock, name="cards")

    def test_new_cache_is_empty(self, cache):
        assert cache.get() is None
        assert cache.state() is CacheState.EMPTY
        assert cache.age() is None
        assert cache.snapshot() == CacheEntry()

    def test_store_then_get_returns_payload(self, cache):
        payload = {"records": [1, 2, 3]}
        cache.store(payload)

        assert cache.get() == payload
        assert cache.state() is CacheState.FRESH

    def test_payload_served_until_ttl_elapses(self, cache, clock):
        cache.store({"records": [1]})

        clock.advance(299.999)
        assert cache.get() == {"records": [1]}

        clock.advance(0.001)
        assert cache.get() is None
        assert cache.state() is CacheState.STALE

    @pytest.mark.parametrize("elapsed", [300, 301, 3600])
    def test_get_misses_at_or_after_ttl(self, cache, clock, elapsed):
        cache.store({"records": []})
        clock.advance(elapsed)

        assert cache.get() is None

    def test_get_does_not_mutate_stale_entry(self, cache, clock):
        entry = cache.store({"records": [1]})
        clock.advance(500)

        assert cache.get() is None
        assert cache.snapshot() is entry

    def test_store_replaces_stale_entry(self, cache, clock):
        cache.store({"records": ["old"]})
        clock.advance(400)
        cache.store({"records": ["new"]})

        assert cache.get() == {"records": ["new"]}
        assert cache.snapshot().stored_at == 400
        assert cache.age() == 0

    def test_invalidate_clears_fresh_entry(self, cache, clock):
        cache.store({"records": [1]})
        clock.advance(1)
        cache.invalidate()

        assert cache.get() is None
        assert cache.snapshot() == CacheEntry(payload=None, stored_at=0.0)
        assert cache.state() is CacheState.EMPTY

    def test_invalidate_clears_stale_entry(self, cache, clock):
        cache.store({"records": [1]})
        clock.advance(1000)
        cache.invalidate()

        assert cache.state() is CacheState.EMPTY

    def test_invalidate_is_idempotent(self, cache):
        cache.invalidate()
        first = cache.snapshot()
        cache.invalidate()

        assert cache.snapshot() == first
        assert cache.get() is None

    def test_scenario_from_store_to_expiry(self, clock):
        """store at t=0, hit at t=100, miss at t=400; invalidate at t=100 misses at t=100.001."""
        cache = TimedCache(300, clock=clock)
        payload = {"records": [1, 2, 3]}
        cache.store(payload)

        clock.now = 100
        assert cache.get() == payload

        clock.now = 400
        assert cache.get() is None

        clock.now = 0
        cache.store(payload)
        clock.now = 100
        cache.invalidate()
        clock.now = 100.001
        assert cache.get() is None

    def test_age_tracks_clock(self, cache, clock):
        cache.store({"records": []})
        clock.advance(42.5)

        assert cache.age() == pytest.approx(42.5)

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, ttl):
        with pytest.raises(ValueError):
            TimedCache(ttl)

    def test_concurrent_stores_never_tear(self):
        """Every observed entry is exactly one that some store produced."""
        ticks = itertools.count(1)
        cache = TimedCache(10_000, clock=lambda: float(next(ticks)))
        stored = []
        observed = []
        stored_lock = threading.Lock()
        start = threading.Barrier(9)

        def writer(writer_id):
            start.wait()
            for i in range(200):
                entry = cache.store((writer_id, i))
                with stored_lock:
                    stored.append(entry)

        def reader():
            start.wait()
            for _ in range(800):
                observed.append(cache.snapshot())

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        threads.append(threading.Thread(target=reader))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        valid = set(stored) | {CacheEntry()}
        assert all(entry in valid for entry in observed)
        assert cache.snapshot() in set(stored)
        assert cache.get() == cache.snapshot().payload

    def test_last_store_wins_between_two_writers(self):
        cache = TimedCache(300)
        results = {}

        def write(name):
            results[name] = cache.store({"records": [name]})

        threads = [threading.Thread(target=write, args=(name,)) for name in ("A", "B")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        final = cache.snapshot()
        assert final in (results["A"], results["B"])
        assert cache.get() == final.payload
