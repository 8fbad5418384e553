import sqlite3

import pytest

from cache_store import ArrayStore, SQLiteStore, create_store
from doc_cache import DocCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture(params=["array", "sqlite"])
def clock_and_store(request, tmp_path):
    clock = FakeClock()
    if request.param == "array":
        return clock, ArrayStore(clock=clock)
    return clock, SQLiteStore(tmp_path / "cache.db", clock=clock)


def test_put_get_forget(clock_and_store):
    _, store = clock_and_store

    assert store.get("missing", "fallback") == "fallback"
    assert store.put("key", {"nested": [1, 2]}, 60) is True
    assert store.get("key") == {"nested": [1, 2]}
    assert store.forget("key") is True
    assert store.forget("key") is False
    assert store.get("key") is None


def test_entries_expire(clock_and_store):
    clock, store = clock_and_store
    store.put("key", "value", 10)

    clock.now += 9
    assert store.get("key") == "value"

    clock.now += 1
    assert store.get("key", "gone") == "gone"


def test_remember_calls_producer_once(clock_and_store):
    _, store = clock_and_store
    calls = []

    def producer():
        calls.append(1)
        return "computed"

    assert store.remember("key", 60, producer) == "computed"
    assert store.remember("key", 60, producer) == "computed"
    assert len(calls) == 1


def test_remember_does_not_store_none(clock_and_store):
    _, store = clock_and_store
    calls = []

    def producer():
        calls.append(1)
        return None

    store.remember("key", 60, producer)
    store.remember("key", 60, producer)
    assert len(calls) == 2


def test_sqlite_store_survives_reopen(tmp_path):
    SQLiteStore(tmp_path / "cache.db").put("key", "persisted", 60)

    assert SQLiteStore(tmp_path / "cache.db").get("key") == "persisted"



def count_rows(store):
    with sqlite3.connect(store.db_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM cache_entries").fetchone()[0]


def test_sqlite_write_purges_expired_rows(tmp_path):
    clock = FakeClock()
    store = SQLiteStore(tmp_path / "cache.db", clock=clock)
    for number in range(50):
        store.put(f"parsed_{number}", number, 10)

    clock.now += 100
    store.put("fresh", "value", 10)

    assert count_rows(store) == 1
    assert store.get("fresh") == "value"


def test_sqlite_open_purges_expired_rows(tmp_path):
    clock = FakeClock()
    SQLiteStore(tmp_path / "cache.db", clock=clock).put("stale", "value", 10)

    clock.now += 100
    reopened = SQLiteStore(tmp_path / "cache.db", clock=clock)

    assert count_rows(reopened) == 0


def test_create_store_selects_backend(tmp_path):
    assert isinstance(create_store({"cache": {"store": "array"}}), ArrayStore)
    assert isinstance(create_store({"cache": {"store": "redis"}}), ArrayStore)

    store = create_store({"cache": {"store": "sqlite", "path": "nested.db"}}, tmp_path)
    assert isinstance(store, SQLiteStore)
    assert store.db_path == tmp_path / "nested.db"


def test_doc_cache_prefixes_keys():
    store = ArrayStore()
    cache = DocCache(store, {"cache": {"key_prefix": "docs"}})

    cache.put("parsed", "value")

    assert store.get("docs.parsed") == "value"
    assert cache.get("parsed") == "value"
    assert cache.tracked_keys() == ["docs.parsed"]


def test_flush_only_removes_own_entries():
    store = ArrayStore()
    store.put("other_tenant.key", "keep", 60)
    cache = DocCache(store, {"cache": {"key_prefix": "docs"}})
    cache.put("a", 1)
    cache.remember("b", lambda: 2)

    assert cache.flush() is True

    assert cache.get("a") is None
    assert cache.get("b") is None
    assert store.get("other_tenant.key") == "keep"


def test_keys_entry_does_not_track_itself():
    store = ArrayStore()
    cache = DocCache(store, {"cache": {"key_prefix": "docs"}})
    cache.put("a", 1)
    cache.put("a", 2)

    assert store.get("docs._keys") == ["docs.a"]


def test_disabled_cache_is_a_pass_through():
    store = ArrayStore()
    cache = DocCache(store, {"cache": {"enabled": False}})
    calls = []

    def producer():
        calls.append(1)
        return "value"

    assert cache.remember("key", producer) == "value"
    assert cache.remember("key", producer) == "value"
    assert len(calls) == 2
    assert cache.get("key", "default") == "default"
    assert cache.put("key", "value") is False
    assert cache.forget("key") is False
    assert cache.flush() is False
