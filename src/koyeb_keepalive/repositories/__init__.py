"""数据访问层模块"""

from koyeb_keepalive.repositories.account_status_repository import AccountStatusRepository
from koyeb_keepalive.repositories.base import BaseRepository
from koyeb_keepalive.repositories.history_repository import HistoryRepository

__all__ = [
    "BaseRepository",
    "HistoryRepository",
    "AccountStatusRepository",
]
