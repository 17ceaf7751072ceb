"""运行结果数据模型"""

from dataclasses import dataclass, field


@dataclass
class AccountRunResult:
    """单个账户的运行结果"""

    id: str
    name: str
    success: bool  # 只取决于账户状态 API，App Ping 不影响
    duration: int  # 毫秒
    logs: list[str]
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "success": self.success,
            "duration": self.duration,
            "logs": list(self.logs),
            "timestamp": self.timestamp,
        }


@dataclass
class RunSummary:
    """一次保活任务的总体结果"""

    success: bool
    logs: list[str] = field(default_factory=list)
    results: list[AccountRunResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "logs": list(self.logs),
            "results": [result.to_dict() for result in self.results],
        }
