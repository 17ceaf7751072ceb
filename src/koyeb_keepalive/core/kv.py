"""KV 存储模块（不透明字符串 get/put）"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from koyeb_keepalive.config.settings import get_settings
from koyeb_keepalive.core.database import get_pool

logger = logging.getLogger(__name__)


class KVStore(ABC):
    """KV 存储基类

    只提供 get/put 两个操作，不保证任何事务性。
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """读取 key，不存在返回 None"""
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """写入 key"""
        pass


class MemoryKVStore(KVStore):
    """进程内存 KV 存储"""

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        self.data[key] = value


class PostgresKVStore(KVStore):
    """基于 PostgreSQL kv_store 表的 KV 存储"""

    async def get(self, key: str) -> str | None:
        pool = await get_pool()
        async with pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT value FROM kv_store WHERE key = $1",
                key,
            )

    async def put(self, key: str, value: str) -> None:
        pool = await get_pool()
        async with pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES ($1, $2, NOW())
                ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value, updated_at = NOW()
                """,
                key,
                value,
            )


# 全局 KV 实例
_kv_store: Optional[KVStore] = None


def get_kv_store() -> Optional[KVStore]:
    """
    获取 KV 存储实例（单例模式）

    Returns:
        配置了 DATABASE_URL 时返回 PostgresKVStore，
        开启 MEMORY_KV 时返回 MemoryKVStore，否则返回 None（未绑定）
    """
    global _kv_store
    if _kv_store is None:
        settings = get_settings()
        if settings.database_url:
            _kv_store = PostgresKVStore()
            logger.info("KV 存储: PostgreSQL")
        elif settings.memory_kv:
            _kv_store = MemoryKVStore()
            logger.info("KV 存储: 内存")
    return _kv_store
