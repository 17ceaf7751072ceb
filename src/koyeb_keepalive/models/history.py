"""历史记录与账户状态数据模型"""

from dataclasses import dataclass

from koyeb_keepalive.config.constants import RunStatus


@dataclass
class HistoryEntry:
    """历史记录条目"""

    time: str
    status: RunStatus
    messages: list[str]

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "status": self.status.value,
            "messages": list(self.messages),
        }


@dataclass
class AccountStatusRecord:
    """账户最近一次运行状态

    存储时按字段浅合并，updatedAt 由存储层写入。
    """

    name: str
    last_run: str
    success: bool
    last_duration: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "lastRun": self.last_run,
            "success": self.success,
            "lastDuration": self.last_duration,
        }
