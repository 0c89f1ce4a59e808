# tests/unit/services/test_cache.py
import pytest

from portfolio_accounting_engine.services.cache import InMemoryKeyValueStore, max_age


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryKeyValueStore(clock=clock)


def test_get_returns_stored_value(store):
    store.set("quotes:PETR4", {"regularMarketPrice": 38.2})
    assert store.get("quotes:PETR4") == {"regularMarketPrice": 38.2}
    assert store.get("quotes:VALE3") is None


def test_stale_entries_are_evicted(store, clock):
    store.set("dividends:HGLG11", ["event"])

    clock.now += 60
    assert store.get("dividends:HGLG11", is_stale=max_age(120)) == ["event"]

    clock.now += 61
    assert store.get("dividends:HGLG11", is_stale=max_age(120)) is None
    assert store.get("dividends:HGLG11") is None


def test_staleness_is_decided_per_call(store, clock):
    store.set("metadata:KNRI11", "Logística")
    clock.now += 30

    assert store.get("metadata:KNRI11", is_stale=max_age(3600)) == "Logística"
    assert store.get("metadata:KNRI11", is_stale=lambda stored_at, now: True) is None


def test_set_refreshes_the_timestamp(store, clock):
    store.set("k", 1)
    clock.now += 100
    store.set("k", 2)
    clock.now += 50
    assert store.get("k", is_stale=max_age(60)) == 2


def test_clear(store):
    store.set("a", 1)
    store.clear()
    assert store.get("a") is None
