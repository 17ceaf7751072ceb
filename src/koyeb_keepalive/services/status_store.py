"""状态存储服务"""

import logging

from koyeb_keepalive.config.constants import DEFAULT_LOG_LIMIT
from koyeb_keepalive.core.kv import KVStore
from koyeb_keepalive.models.history import HistoryEntry
from koyeb_keepalive.repositories.account_status_repository import AccountStatusRepository
from koyeb_keepalive.repositories.history_repository import HistoryRepository

logger = logging.getLogger(__name__)


class StatusStore:
    """
    状态存储服务

    对历史记录和账户状态的读写都是尽力而为：未绑定 KV 时为空操作，
    存储异常只记录日志，不向调用方抛出。读写之间没有任何隔离，
    并发调用可能互相覆盖。
    """

    def __init__(self, kv: KVStore | None, log_limit: int = DEFAULT_LOG_LIMIT):
        self.kv = kv
        self.history_repo = HistoryRepository(kv, limit=log_limit) if kv else None
        self.status_repo = AccountStatusRepository(kv) if kv else None

    @property
    def available(self) -> bool:
        """是否绑定了 KV 存储"""
        return self.kv is not None

    async def append_history(self, entry: HistoryEntry) -> None:
        """保存一次运行记录到历史（头部插入，超出上限截断）"""
        if not self.history_repo:
            return
        try:
            await self.history_repo.prepend(entry)
        except Exception as e:
            logger.error(f"KV 保存日志失败: {e}", exc_info=True)

    async def get_history(self) -> list[dict]:
        """获取历史记录（最新在前），失败返回空列表"""
        if not self.history_repo:
            return []
        try:
            return await self.history_repo.get_all()
        except Exception as e:
            logger.error(f"KV 读取日志失败: {e}")
            return []

    async def get_last_run(self) -> str | None:
        """获取最后运行时间"""
        if not self.history_repo:
            return None
        try:
            return await self.history_repo.get_last_run()
        except Exception as e:
            logger.error(f"KV 读取最后运行时间失败: {e}")
            return None

    async def update_account_status(self, account_id: str, fields: dict) -> None:
        """
        更新账户状态

        Args:
            account_id: 账户 ID
            fields: 需要合并的字段（浅合并）
        """
        if not self.status_repo:
            return
        try:
            await self.status_repo.merge(account_id, fields)
        except Exception as e:
            logger.error(f"更新账户状态失败: 账户 {account_id} - {e}", exc_info=True)

    async def get_account_status(self) -> dict[str, dict]:
        """获取所有账户状态，失败返回空字典"""
        if not self.status_repo:
            return {}
        try:
            return await self.status_repo.get_all()
        except Exception as e:
            logger.error(f"获取账户状态失败: {e}")
            return {}
