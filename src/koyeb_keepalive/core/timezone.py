"""时区处理模块"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from koyeb_keepalive.config.settings import get_settings


def get_timezone():
    """获取配置的时区"""
    settings = get_settings()
    return ZoneInfo(settings.timezone)


def utc_now() -> datetime:
    """获取当前 UTC 时间（aware datetime）"""
    return datetime.now(timezone.utc)


def iso_now() -> str:
    """当前 UTC 时间的 ISO-8601 字符串，精确到毫秒，以 Z 结尾"""
    return to_iso(utc_now())


def to_iso(dt: datetime) -> str:
    """将 datetime 格式化为 ISO-8601 字符串（UTC, 毫秒）"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value) -> datetime | None:
    """解析 ISO-8601 字符串，失败或非字符串返回 None"""
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_local(dt: datetime) -> datetime:
    """将 datetime 转换为本地时区"""
    if dt.tzinfo is None:
        # naive datetime 视为 UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(get_timezone())


def format_datetime(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """格式化 datetime 为本地时区字符串"""
    local_dt = to_local(dt)
    return local_dt.strftime(fmt)
