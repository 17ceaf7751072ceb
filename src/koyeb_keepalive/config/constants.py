"""常量定义模块"""

from enum import Enum
from typing import Final


VERSION: Final[str] = "2.0.0"


# ==================== HTTP 请求配置 ====================
DEFAULT_HTTP_HEADERS: Final[dict[str, str]] = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36 Edg/125.0.0.0",
    "accept-language": "zh-CN,zh;q=0.9,en;q=0.8",
}

KOYEB_PROFILE_API: Final[str] = "https://app.koyeb.com/v1/account/profile"


# ==================== KV 存储配置 ====================
DEFAULT_LOG_LIMIT: Final[int] = 50  # 保存最近多少条日志
HISTORY_KEY: Final[str] = "history"
LAST_RUN_KEY: Final[str] = "last_run"
ACCOUNT_STATUS_KEY: Final[str] = "account_status"


# ==================== 运行状态 ====================
class RunStatus(str, Enum):
    """运行状态枚举"""
    SUCCESS = "success"
    ERROR = "error"


# ==================== 触发来源 ====================
class TriggerSource(str, Enum):
    """触发来源枚举"""
    CRON = "Cron Scheduled"
    DASHBOARD = "Web Dashboard"
    SINGLE_ACCOUNT = "Single Account Trigger"
    MANUAL = "Manual"


# ==================== 日志图标 ====================
ICON_START: Final[str] = "🚀"
ICON_COUNT: Final[str] = "📊"
ICON_PROCESS: Final[str] = "🔄"
ICON_SUCCESS: Final[str] = "✅"
ICON_FAILURE: Final[str] = "❌"
ICON_PING: Final[str] = "🌐"
ICON_WARNING: Final[str] = "⚠️"
