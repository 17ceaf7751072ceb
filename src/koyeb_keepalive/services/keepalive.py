"""保活服务"""

import logging
import time

from koyeb_keepalive.config.constants import RunStatus, TriggerSource
from koyeb_keepalive.core.timezone import iso_now
from koyeb_keepalive.models.account import Account
from koyeb_keepalive.models.history import AccountStatusRecord, HistoryEntry
from koyeb_keepalive.models.run_result import AccountRunResult, RunSummary
from koyeb_keepalive.services.network import NetworkService
from koyeb_keepalive.services.status_store import StatusStore
from koyeb_keepalive.sites.base import PlatformAdapter
from koyeb_keepalive.sites.koyeb import KoyebAdapter
from koyeb_keepalive.utils.formatter import (
    format_account_count,
    format_account_done,
    format_account_start,
    format_no_accounts,
    format_ping_result,
    format_profile_result,
    format_run_header,
    stamp,
)

logger = logging.getLogger(__name__)


class KeepAliveService:
    """保活服务"""

    def __init__(
        self,
        status_store: StatusStore,
        adapter: PlatformAdapter | None = None,
        network: NetworkService | None = None,
    ):
        self.status_store = status_store
        self.adapter = adapter or KoyebAdapter()
        self.network = network or NetworkService()

    async def run(
        self,
        accounts: list[Account],
        account_id: str | None = None,
        source: str = TriggerSource.MANUAL.value,
    ) -> RunSummary:
        """
        执行一次保活任务

        账户按配置顺序依次处理，单个账户失败不影响后续账户。

        Args:
            accounts: 已解析的账户列表
            account_id: 只处理指定 ID 的账户；不匹配时不处理任何账户
            source: 触发来源

        Returns:
            运行结果
        """
        timestamp = iso_now()
        logs = [
            stamp(timestamp, format_run_header(source)),
            stamp(timestamp, format_account_count(len(accounts))),
        ]

        logger.info(f"保活任务开始: 来源 {source}, 账户数 {len(accounts)}")

        if not accounts:
            logger.warning("未配置任何账户，跳过保活任务")
            logs.append(stamp(timestamp, format_no_accounts()))
            await self._save_history(logs, False)
            return RunSummary(success=False, logs=logs, results=[])

        if account_id:
            to_process = [account for account in accounts if account.id == account_id]
            if not to_process:
                logger.warning(f"未找到账户: ID={account_id}")
        else:
            to_process = accounts

        all_success = True
        results = []

        for account in to_process:
            logs.append(stamp(timestamp, format_account_start(account)))

            result = await self._process_account(account)
            results.append(result)
            if not result.success:
                all_success = False

            await self.status_store.update_account_status(
                account.id,
                AccountStatusRecord(
                    name=account.name,
                    last_run=iso_now(),
                    success=result.success,
                    last_duration=result.duration,
                ).to_dict(),
            )

            logs.append(stamp(timestamp, format_account_done(account, result.success, result.duration)))
            for line in result.logs:
                logs.append(stamp(timestamp, f"  {line}"))

        await self._save_history(logs, all_success)

        logger.info(
            f"保活任务完成: 处理了 {len(results)} 个账户, "
            f"成功 {sum(1 for r in results if r.success)} 个"
        )
        return RunSummary(success=all_success, logs=logs, results=results)

    async def _process_account(self, account: Account) -> AccountRunResult:
        """处理单个账户：请求状态接口，可选 Ping App URL"""
        start = time.perf_counter()
        account_logs: list[str] = []
        success = True

        try:
            profile = await self.adapter.get_profile(account.token)
            account_logs.append(format_profile_result(profile))
            success = bool(profile.get("success"))
        except Exception as e:
            logger.error(f"账户处理异常: {account.name} ({account.id}) - {e}", exc_info=True)
            account_logs.append(format_profile_result({"error": str(e)}))
            success = False

        if account.app_url:
            # App Ping 只记录日志，不影响账户结果
            try:
                ping = await self.network.ping(account.app_url)
            except Exception as e:
                ping = {"error": str(e)}
            account_logs.append(format_ping_result(ping))

        duration = int((time.perf_counter() - start) * 1000)
        if success:
            logger.info(f"账户保活成功: {account.name} ({duration}ms)")
        else:
            logger.warning(f"账户保活失败: {account.name} ({duration}ms)")

        return AccountRunResult(
            id=account.id,
            name=account.name,
            success=success,
            duration=duration,
            logs=account_logs,
            timestamp=iso_now(),
        )

    async def _save_history(self, logs: list[str], success: bool) -> None:
        """保存总体日志到历史"""
        await self.status_store.append_history(HistoryEntry(
            time=iso_now(),
            status=RunStatus.SUCCESS if success else RunStatus.ERROR,
            messages=list(logs),
        ))
