"""账户数据模型"""

from dataclasses import dataclass


@dataclass
class Account:
    """账户模型"""

    id: str  # acc_1, acc_2 ...（按配置顺序生成）
    name: str
    token: str | None
    app_url: str | None = None

    def to_dict(self) -> dict:
        """转换为 API 输出格式"""
        return {
            "id": self.id,
            "name": self.name,
            "token": self.token,
            "appUrl": self.app_url,
        }
