"""数据模型模块"""

from koyeb_keepalive.models.account import Account
from koyeb_keepalive.models.history import AccountStatusRecord, HistoryEntry
from koyeb_keepalive.models.run_result import AccountRunResult, RunSummary

__all__ = [
    "Account",
    "AccountRunResult",
    "RunSummary",
    "HistoryEntry",
    "AccountStatusRecord",
]
