from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager

import pytest
from conftest import FailingKV

from koyeb_keepalive.config.constants import ACCOUNT_STATUS_KEY, HISTORY_KEY, LAST_RUN_KEY, RunStatus
from koyeb_keepalive.core import kv as kv_module
from koyeb_keepalive.core.kv import MemoryKVStore
from koyeb_keepalive.models.history import HistoryEntry
from koyeb_keepalive.services.status_store import StatusStore


def _entry(n: int) -> HistoryEntry:
    return HistoryEntry(time=f"2026-01-01T00:00:{n:02d}.000Z", status=RunStatus.SUCCESS, messages=[f"run {n}"])


def test_history_is_bounded_and_most_recent_first(kv: MemoryKVStore) -> None:
    store = StatusStore(kv, log_limit=5)

    async def scenario():
        for n in range(12):
            await store.append_history(_entry(n))
        return await store.get_history()

    history = asyncio.run(scenario())
    assert len(history) == 5
    assert history[0]["messages"] == ["run 11"]
    assert [h["messages"][0] for h in history] == ["run 11", "run 10", "run 9", "run 8", "run 7"]


def test_append_history_writes_last_run(kv: MemoryKVStore, store: StatusStore) -> None:
    asyncio.run(store.append_history(_entry(1)))
    assert kv.data[LAST_RUN_KEY].endswith("Z")
    assert json.loads(kv.data[HISTORY_KEY])[0]["status"] == "success"
    assert asyncio.run(store.get_last_run()) == kv.data[LAST_RUN_KEY]


def test_corrupt_history_is_treated_as_empty(kv: MemoryKVStore, store: StatusStore) -> None:
    kv.data[HISTORY_KEY] = "{not json"
    assert asyncio.run(store.get_history()) == []

    asyncio.run(store.append_history(_entry(1)))
    assert len(json.loads(kv.data[HISTORY_KEY])) == 1


def test_wrong_shape_history_is_treated_as_empty(kv: MemoryKVStore, store: StatusStore) -> None:
    kv.data[HISTORY_KEY] = '{"time": "x"}'
    assert asyncio.run(store.get_history()) == []


def test_no_store_bound_is_noop() -> None:
    store = StatusStore(None)
    assert not store.available

    async def scenario():
        await store.append_history(_entry(1))
        await store.update_account_status("acc_1", {"name": "A"})
        return await store.get_history(), await store.get_account_status(), await store.get_last_run()

    assert asyncio.run(scenario()) == ([], {}, None)


def test_failing_store_is_absorbed() -> None:
    store = StatusStore(FailingKV())

    async def scenario():
        await store.append_history(_entry(1))
        await store.update_account_status("acc_1", {"name": "A"})
        return await store.get_history(), await store.get_account_status()

    assert asyncio.run(scenario()) == ([], {})


def test_account_status_shallow_merge_keeps_stale_fields(kv: MemoryKVStore, store: StatusStore) -> None:
    kv.data[ACCOUNT_STATUS_KEY] = json.dumps({"acc_1": {"name": "Old", "legacyField": 1}})

    asyncio.run(store.update_account_status("acc_1", {"name": "A", "success": True, "lastDuration": 12}))
    status = asyncio.run(store.get_account_status())

    record = status["acc_1"]
    assert record["name"] == "A"
    assert record["success"] is True
    assert record["lastDuration"] == 12
    assert record["legacyField"] == 1
    assert record["updatedAt"].endswith("Z")


def test_account_status_creates_entries_per_account(store: StatusStore) -> None:
    async def scenario():
        await store.update_account_status("acc_1", {"name": "A", "success": True})
        await store.update_account_status("acc_2", {"name": "B", "success": False})
        return await store.get_account_status()

    status = asyncio.run(scenario())
    assert set(status) == {"acc_1", "acc_2"}
    assert status["acc_2"]["success"] is False


def test_corrupt_account_status_is_replaced(kv: MemoryKVStore, store: StatusStore) -> None:
    kv.data[ACCOUNT_STATUS_KEY] = "[1, 2"
    assert asyncio.run(store.get_account_status()) == {}

    asyncio.run(store.update_account_status("acc_1", {"name": "A"}))
    assert list(json.loads(kv.data[ACCOUNT_STATUS_KEY])) == ["acc_1"]


class FakeConnection:
    def __init__(self, rows: dict[str, str]):
        self.rows = rows

    async def fetchval(self, query: str, key: str):
        return self.rows.get(key)

    async def execute(self, query: str, key: str, value: str) -> None:
        self.rows[key] = value


class FakePool:
    def __init__(self):
        self.conn = FakeConnection({})
        self.acquired = 0

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        yield self.conn


def test_postgres_kv_uses_pooled_connections(monkeypatch: pytest.MonkeyPatch) -> None:
    pool = FakePool()

    async def fake_get_pool():
        return pool

    monkeypatch.setattr(kv_module, "get_pool", fake_get_pool)
    store = kv_module.PostgresKVStore()

    async def scenario():
        await store.put("history", "[]")
        return await store.get("history"), await store.get("missing")

    assert asyncio.run(scenario()) == ("[]", None)
    assert pool.acquired == 3
