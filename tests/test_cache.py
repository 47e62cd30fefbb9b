"""Tests for the classification result cache."""

from __future__ import annotations

import threading
import time

import pytest

from exoscope.services.cache import ResultCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestResultCache:
    def test_unbounded_by_default(self):
        cache = ResultCache()
        for i in range(500):
            cache.set(f"k{i}", i)
        assert len(cache) == 500
        assert cache.get("k0") == 0

    def test_capacity_evicts_least_recently_used(self):
        cache = ResultCache(capacity=2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.get("a") == 1  # "b" is now the oldest
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_ttl_expires_entries(self):
        clock = FakeClock()
        cache = ResultCache(ttl_seconds=10, clock=clock)
        cache.set("a", 1)
        clock.now = 5
        assert cache.get("a") == 1
        clock.now = 16
        assert cache.get("a") is None
        assert len(cache) == 0

    @pytest.mark.parametrize("kwargs", [{"capacity": 0}, {"ttl_seconds": 0}, {"ttl_seconds": -1}])
    def test_invalid_policy_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ResultCache(**kwargs)

    def test_get_or_compute_computes_once(self):
        cache = ResultCache()
        calls = []

        def compute():
            calls.append(1)
            return object()

        first = cache.get_or_compute("k", compute)
        second = cache.get_or_compute("k", compute)
        assert first is second
        assert len(calls) == 1
        assert (cache.hits, cache.misses) == (1, 1)

    def test_failed_write_still_returns_result(self, monkeypatch):
        cache = ResultCache()

        def broken_set(key, value):
            raise RuntimeError("backing store unavailable")

        monkeypatch.setattr(cache, "set", broken_set)
        assert cache.get_or_compute("k", lambda: 42) == 42
        assert "k" not in cache

    def test_compute_errors_propagate(self):
        cache = ResultCache()

        def compute():
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            cache.get_or_compute("k", compute)
        assert "k" not in cache

    def test_single_flight_under_concurrency(self):
        cache = ResultCache()
        calls = []
        barrier = threading.Barrier(8)
        results = []

        def compute():
            calls.append(1)
            time.sleep(0.05)
            return "value"

        def worker():
            barrier.wait()
            results.append(cache.get_or_compute("same", compute))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["value"] * 8
        assert len(calls) == 1
        assert (cache.hits, cache.misses) == (7, 1)

    def test_counters_add_up_across_threads(self):
        cache = ResultCache()
        keys = [f"k{i % 5}" for i in range(400)]

        def worker(chunk):
            for key in chunk:
                cache.get_or_compute(key, lambda: key.upper())

        threads = [threading.Thread(target=worker, args=(keys[i::8],)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.misses == 5
        assert cache.hits + cache.misses == len(keys)

    def test_clear(self):
        cache = ResultCache()
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.clear() == 2
        assert len(cache) == 0
