from __future__ import annotations

import pytest

from koyeb_keepalive.core.kv import MemoryKVStore
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.status_store import StatusStore


class FakeAdapter:
    """Returns canned profile results keyed by token."""

    def __init__(self, responses: dict[str, dict] | None = None):
        self.responses = responses or {}
        self.calls: list[str | None] = []

    async def get_profile(self, token):
        self.calls.append(token)
        response = self.responses.get(token)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return {"success": True, "status_code": 200, "reason": "OK", "email": f"{token}@example.com", "duration": 5, "error": None}
        return response


class FakeNetwork:
    def __init__(self, responses: dict[str, dict] | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    async def ping(self, url):
        self.calls.append(url)
        return self.responses.get(url, {"status_code": 200, "duration": 3, "error": None})


class FailingKV:
    async def get(self, key):
        raise ConnectionError("kv down")

    async def put(self, key, value):
        raise ConnectionError("kv down")


def unauthorized() -> dict:
    return {"success": False, "status_code": 401, "reason": "Unauthorized", "email": None, "duration": 4, "error": None}


@pytest.fixture()
def kv() -> MemoryKVStore:
    return MemoryKVStore()


@pytest.fixture()
def store(kv: MemoryKVStore) -> StatusStore:
    return StatusStore(kv, log_limit=50)


@pytest.fixture()
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture()
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture()
def service(store: StatusStore, adapter: FakeAdapter, network: FakeNetwork) -> KeepAliveService:
    return KeepAliveService(store, adapter=adapter, network=network)
