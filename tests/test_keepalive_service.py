from __future__ import annotations

import asyncio

from conftest import FailingKV, FakeAdapter, FakeNetwork, unauthorized

from koyeb_keepalive.models.account import Account
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.status_store import StatusStore


def _accounts(*specs) -> list[Account]:
    return [
        Account(id=f"acc_{i}", name=name, token=token, app_url=app_url)
        for i, (name, token, app_url) in enumerate(specs, start=1)
    ]


def test_single_account_success(service: KeepAliveService, store: StatusStore) -> None:
    summary = asyncio.run(service.run(_accounts(("A", "t1", None))))

    assert summary.success is True
    assert [(r.id, r.name, r.success) for r in summary.results] == [("acc_1", "A", True)]
    assert "t1@example.com" in summary.results[0].logs[0]

    history = asyncio.run(store.get_history())
    assert len(history) == 1
    assert history[0]["status"] == "success"
    assert history[0]["messages"] == summary.logs


def test_partial_failure_keeps_processing(store: StatusStore, network: FakeNetwork) -> None:
    adapter = FakeAdapter({"bad": unauthorized()})
    service = KeepAliveService(store, adapter=adapter, network=network)

    summary = asyncio.run(service.run(_accounts(("First", "bad", None), ("Second", "good", None))))

    assert summary.success is False
    assert [r.name for r in summary.results] == ["First", "Second"]
    assert summary.results[0].success is False
    assert summary.results[1].success is True
    assert "401 Unauthorized" in summary.results[0].logs[0]
    assert adapter.calls == ["bad", "good"]

    history = asyncio.run(store.get_history())
    assert history[0]["status"] == "error"


def test_transport_error_marks_account_failed(store: StatusStore, network: FakeNetwork) -> None:
    adapter = FakeAdapter({"t1": {"success": False, "status_code": None, "reason": "", "email": None, "duration": 1, "error": "connection refused"}})
    service = KeepAliveService(store, adapter=adapter, network=network)

    summary = asyncio.run(service.run(_accounts(("A", "t1", None))))
    assert summary.success is False
    assert "请求异常: connection refused" in summary.results[0].logs[0]


def test_adapter_exception_does_not_escape(store: StatusStore, network: FakeNetwork) -> None:
    adapter = FakeAdapter({"boom": RuntimeError("unexpected")})
    service = KeepAliveService(store, adapter=adapter, network=network)

    summary = asyncio.run(service.run(_accounts(("A", "boom", None), ("B", "ok", None))))
    assert [r.success for r in summary.results] == [False, True]


def test_app_ping_failure_does_not_change_success(store: StatusStore, adapter: FakeAdapter) -> None:
    network = FakeNetwork({"https://a.koyeb.app": {"status_code": None, "duration": 2, "error": "timeout"}})
    service = KeepAliveService(store, adapter=adapter, network=network)

    summary = asyncio.run(service.run(_accounts(("A", "t1", "https://a.koyeb.app"))))

    result = summary.results[0]
    assert result.success is True
    assert len(result.logs) == 2
    assert "App Ping 失败: timeout" in result.logs[1]
    assert network.calls == ["https://a.koyeb.app"]


def test_app_ping_skipped_without_url(service: KeepAliveService, network: FakeNetwork) -> None:
    summary = asyncio.run(service.run(_accounts(("A", "t1", None))))
    assert network.calls == []
    assert len(summary.results[0].logs) == 1


def test_selector_runs_one_account(service: KeepAliveService, adapter: FakeAdapter) -> None:
    summary = asyncio.run(service.run(_accounts(("A", "t1", None), ("B", "t2", None)), account_id="acc_2"))
    assert [r.id for r in summary.results] == ["acc_2"]
    assert adapter.calls == ["t2"]


def test_selector_matching_nothing_is_vacuous_success(service: KeepAliveService, adapter: FakeAdapter) -> None:
    summary = asyncio.run(service.run(_accounts(("A", "t1", None)), account_id="acc_9"))
    assert summary.results == []
    assert summary.success is True
    assert adapter.calls == []


def test_no_accounts_is_failed_run(service: KeepAliveService, store: StatusStore) -> None:
    summary = asyncio.run(service.run([]))

    assert summary.success is False
    assert summary.results == []
    assert any("未配置任何 Koyeb 账户" in line for line in summary.logs)
    assert asyncio.run(store.get_history())[0]["status"] == "error"


def test_account_status_written_per_account(service: KeepAliveService, store: StatusStore) -> None:
    asyncio.run(service.run(_accounts(("A", "t1", None), ("B", "t2", None))))
    status = asyncio.run(store.get_account_status())

    assert set(status) == {"acc_1", "acc_2"}
    assert status["acc_1"]["name"] == "A"
    assert status["acc_1"]["success"] is True
    assert {"lastRun", "lastDuration", "updatedAt"} <= set(status["acc_1"])


def test_log_layout(service: KeepAliveService) -> None:
    summary = asyncio.run(service.run(_accounts(("A", "t1", None)), source="Web Dashboard"))

    timestamp = summary.logs[0][1:summary.logs[0].index("]")]
    assert all(line.startswith(f"[{timestamp}] ") for line in summary.logs)
    assert "来源: Web Dashboard" in summary.logs[0]
    assert "发现 1 个账户" in summary.logs[1]
    assert "处理账户: A (ID: acc_1)" in summary.logs[2]
    assert "✅ 账户 A 完成" in summary.logs[3]
    assert summary.logs[4].startswith(f"[{timestamp}]   ✅ Koyeb API 验证成功")


def test_run_without_store(adapter: FakeAdapter, network: FakeNetwork) -> None:
    service = KeepAliveService(StatusStore(None), adapter=adapter, network=network)
    summary = asyncio.run(service.run(_accounts(("A", "t1", None))))

    assert summary.success is True
    assert [r.id for r in summary.results] == ["acc_1"]
    assert asyncio.run(service.status_store.get_history()) == []


def test_storage_failure_does_not_affect_result(adapter: FakeAdapter, network: FakeNetwork) -> None:
    service = KeepAliveService(StatusStore(FailingKV()), adapter=adapter, network=network)
    summary = asyncio.run(service.run(_accounts(("A", "t1", None))))
    assert summary.success is True


def test_summary_to_dict(service: KeepAliveService) -> None:
    data = asyncio.run(service.run(_accounts(("A", "t1", None)))).to_dict()
    assert set(data) == {"success", "logs", "results"}
    assert set(data["results"][0]) == {"id", "name", "success", "duration", "logs", "timestamp"}
