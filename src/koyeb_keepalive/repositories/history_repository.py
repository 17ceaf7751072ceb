"""Run history data access layer"""

from typing import List

from koyeb_keepalive.config.constants import (
    DEFAULT_LOG_LIMIT,
    HISTORY_KEY,
    LAST_RUN_KEY,
)
from koyeb_keepalive.core.kv import KVStore
from koyeb_keepalive.core.timezone import iso_now
from koyeb_keepalive.models.history import HistoryEntry
from koyeb_keepalive.repositories.base import BaseRepository


class HistoryRepository(BaseRepository):
    """Run history Repository (most-recent-first, bounded)"""

    def __init__(self, kv: KVStore, limit: int = DEFAULT_LOG_LIMIT):
        super().__init__(kv)
        self.limit = limit

    async def get_all(self) -> List[dict]:
        """Get stored history verbatim"""
        return await self._get_json(HISTORY_KEY, list) or []

    async def prepend(self, entry: HistoryEntry) -> List[dict]:
        """
        Insert an entry at the front and truncate to the limit

        Not isolated: concurrent callers may lose each other's entries.
        """
        history = await self.get_all()
        history.insert(0, entry.to_dict())
        history = history[: self.limit]

        await self._put_json(HISTORY_KEY, history)
        await self.kv.put(LAST_RUN_KEY, iso_now())
        return history

    async def get_last_run(self) -> str | None:
        """Get the last save timestamp"""
        return await self.kv.get(LAST_RUN_KEY)
