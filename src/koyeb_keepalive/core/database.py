"""数据库连接池管理"""

import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from koyeb_keepalive.config.settings import get_settings

logger = logging.getLogger(__name__)

_pool: Optional[Pool] = None


async def get_pool() -> Pool:
    """获取数据库连接池（单例模式）"""
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=1,
            max_size=5,
            command_timeout=60,
        )
    return _pool


async def close_pool():
    """关闭数据库连接池"""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


# ==================== 数据库自动初始化 ====================

_INIT_SQL_TABLES = """
-- KV 表：value 为不透明字符串（JSON 文本）
CREATE TABLE IF NOT EXISTS kv_store (
    key VARCHAR(255) PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT NOW()
);
"""


async def init_database():
    """Initialize the kv table if it doesn't exist"""
    settings = get_settings()

    try:
        conn = await asyncpg.connect(settings.database_url)
        try:
            await conn.execute(_INIT_SQL_TABLES)
            logger.info("数据库表初始化成功")
        finally:
            await conn.close()

    except Exception as e:
        logger.error(f"数据库初始化失败: {e}", exc_info=True)
        raise
