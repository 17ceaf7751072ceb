"""格式化工具"""

from datetime import datetime

from koyeb_keepalive.config.constants import (
    ICON_COUNT,
    ICON_FAILURE,
    ICON_PING,
    ICON_PROCESS,
    ICON_START,
    ICON_SUCCESS,
    ICON_WARNING,
)


def stamp(timestamp: str, message: str) -> str:
    """给日志行加上运行时间戳前缀"""
    return f"[{timestamp}] {message}"


def format_run_header(source: str) -> str:
    return f"{ICON_START} 多账户保活任务开始 (来源: {source})"


def format_account_count(count: int) -> str:
    return f"{ICON_COUNT} 发现 {count} 个账户"


def format_no_accounts() -> str:
    return f"{ICON_FAILURE} 错误: 未配置任何 Koyeb 账户。请设置 KOYEB_TOKENS 环境变量。"


def format_account_start(account) -> str:
    return f"{ICON_PROCESS} 处理账户: {account.name} (ID: {account.id})"


def format_account_done(account, success: bool, duration: int) -> str:
    icon = ICON_SUCCESS if success else ICON_FAILURE
    return f"{icon} 账户 {account.name} 完成 ({duration}ms)"


def format_profile_result(result: dict) -> str:
    """
    格式化账户状态接口结果

    Args:
        result: 适配器返回的结果字典

    Returns:
        单行日志
    """
    if result.get("error"):
        return f"{ICON_FAILURE} Koyeb API 请求异常: {result['error']}"

    if result.get("success"):
        email = result.get("email") or "Unknown"
        return f"{ICON_SUCCESS} Koyeb API 验证成功 ({result.get('duration', 0)}ms) - 用户: {email}"

    return f"{ICON_FAILURE} Koyeb API 失败: {result.get('status_code')} {result.get('reason', '')}".rstrip()


def format_ping_result(result: dict) -> str:
    """格式化 App Ping 结果"""
    if result.get("error"):
        return f"{ICON_WARNING} App Ping 失败: {result['error']}"
    return f"{ICON_PING} App Ping: {result.get('status_code')} ({result.get('duration', 0)}ms)"


def format_relative_time(dt: datetime | None, current: datetime) -> str:
    """
    格式化相对时间

    Args:
        dt: 目标时间（aware）
        current: 当前时间（aware）

    Returns:
        如 "刚刚"、"5分钟前"、"3小时前"、"2天前"
    """
    if dt is None:
        return "从未运行"

    diff_seconds = (current - dt).total_seconds()
    diff_mins = int(diff_seconds // 60)
    diff_hours = int(diff_seconds // 3600)
    diff_days = int(diff_seconds // 86400)

    if diff_mins < 1:
        return "刚刚"
    if diff_mins < 60:
        return f"{diff_mins}分钟前"
    if diff_hours < 24:
        return f"{diff_hours}小时前"
    return f"{diff_days}天前"
