# tests/test_kv_store.py
"""
Testes para TTLCache e DailyCounter (relogio injetado).
"""
from __future__ import annotations

from datetime import date

import pytest

from direito.utils.kv_store import DailyCounter, DailyLimitExceeded, InMemoryStore, TTLCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


# ── TTLCache ───────────────────────────────────────────────────────────────────

class TestTTLCache:
    def test_get_before_expiry(self):
        clock = FakeClock()
        cache = TTLCache(InMemoryStore(), ttl_seconds=60, clock=clock)
        cache.set("lei", {"texto": "x"})
        clock.now += 59
        assert cache.get("lei") == {"texto": "x"}

    def test_expired_entry_deleted(self):
        clock = FakeClock()
        store = InMemoryStore()
        cache = TTLCache(store, ttl_seconds=60, clock=clock)
        cache.set("lei", "x")
        clock.now += 60
        assert cache.get("lei") is None
        assert len(store) == 0

    def test_default_on_miss(self):
        cache = TTLCache(InMemoryStore(), ttl_seconds=1)
        assert cache.get("nada", default="d") == "d"

    def test_get_or_load_calls_loader_once(self):
        clock = FakeClock()
        cache = TTLCache(InMemoryStore(), ttl_seconds=10, clock=clock)
        calls = []

        def loader():
            calls.append(1)
            return len(calls)

        assert cache.get_or_load("k", loader) == 1
        assert cache.get_or_load("k", loader) == 1
        clock.now += 10
        assert cache.get_or_load("k", loader) == 2

    def test_falsy_values_are_cached(self):
        cache = TTLCache(InMemoryStore(), ttl_seconds=10, clock=FakeClock())
        cache.set("vazio", [])
        assert cache.get_or_load("vazio", lambda: ["outro"]) == []

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_invalid_ttl(self, ttl):
        with pytest.raises(ValueError):
            TTLCache(InMemoryStore(), ttl_seconds=ttl)


# ── DailyCounter ───────────────────────────────────────────────────────────────

class TestDailyCounter:
    def test_increment_until_limit(self):
        counter = DailyCounter(InMemoryStore(), limit=2, today=lambda: date(2024, 3, 1))
        assert counter.increment("ip") == 1
        assert counter.increment("ip") == 2
        assert counter.remaining("ip") == 0
        with pytest.raises(DailyLimitExceeded) as exc:
            counter.increment("ip")
        assert exc.value.limit == 2
        assert counter.count("ip") == 2

    def test_subjects_are_independent(self):
        counter = DailyCounter(InMemoryStore(), limit=1, today=lambda: date(2024, 3, 1))
        counter.increment("a")
        assert counter.count("b") == 0
        assert counter.increment("b") == 1

    def test_resets_on_new_day(self):
        day = {"d": date(2024, 3, 1)}
        counter = DailyCounter(InMemoryStore(), limit=1, today=lambda: day["d"])
        counter.increment("ip")
        day["d"] = date(2024, 3, 2)
        assert counter.count("ip") == 0
        assert counter.remaining("ip") == 1
        assert counter.increment("ip") == 1

    def test_stale_days_are_pruned(self):
        day = {"d": date(2024, 3, 1)}
        store = InMemoryStore()
        counter = DailyCounter(store, limit=5, today=lambda: day["d"])
        for i in range(30):
            day["d"] = date(2024, 3, 1 + i)
            for ip in range(100):
                counter.increment(f"raspar:10.0.{i}.{ip}")
        assert len(store) == 100
        assert all(store.get(k)[0] == "2024-03-30" for k in store.keys("daily:"))

    def test_prune_keeps_other_keys(self):
        day = {"d": date(2024, 3, 1)}
        store = InMemoryStore()
        store.set("cache:lei", "x")
        counter = DailyCounter(store, limit=5, today=lambda: day["d"])
        counter.increment("ip")
        day["d"] = date(2024, 3, 2)
        counter.increment("outro")
        assert store.get("daily:ip") is None
        assert store.get("cache:lei") == "x"
        assert counter.count("outro") == 1


class TestInMemoryStore:
    def test_basic_operations(self):
        store = InMemoryStore()
        store.set("a", 1)
        assert store.get("a") == 1
        store.delete("a")
        store.delete("a")
        assert store.get("a", "x") == "x"

    def test_keys_by_prefix(self):
        store = InMemoryStore()
        store.set("daily:a", 1)
        store.set("daily:b", 2)
        store.set("cache:c", 3)
        assert sorted(store.keys("daily:")) == ["daily:a", "daily:b"]
        assert len(list(store.keys())) == 3
