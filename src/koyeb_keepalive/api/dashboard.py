"""Dashboard 页面数据"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from koyeb_keepalive.config.constants import VERSION, RunStatus
from koyeb_keepalive.core.timezone import format_datetime, parse_iso, utc_now
from koyeb_keepalive.models.account import Account
from koyeb_keepalive.utils.formatter import format_relative_time

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _account_view(account: Account, status, current) -> dict:
    view = {
        "id": account.id,
        "name": account.name,
        "app_url": account.app_url,
        "ran": False,
        "success": False,
        "last_run": "从未运行",
    }
    if isinstance(status, dict):
        view["ran"] = True
        view["success"] = bool(status.get("success"))
        view["last_run"] = format_relative_time(parse_iso(status.get("lastRun")), current)
    return view


def _entry_view(entry: dict) -> dict:
    messages = entry.get("messages")
    if not isinstance(messages, list):
        messages = []
    when = parse_iso(entry.get("time"))
    return {
        "success": entry.get("status") == RunStatus.SUCCESS.value,
        "time": format_datetime(when) if when else str(entry.get("time", "")),
        "messages": [str(msg) for msg in messages],
    }


def build_dashboard_context(
    accounts: list[Account],
    statuses: dict[str, dict],
    history: list[dict],
    has_kv: bool,
) -> dict:
    """
    生成 Dashboard 模板上下文

    存储中格式错误的状态或历史条目按缺失处理。

    Args:
        accounts: 账户列表
        statuses: 账户状态（按账户 ID）
        history: 历史记录（最新在前）
        has_kv: 是否绑定了 KV

    Returns:
        模板上下文字典
    """
    current = utc_now()
    valid = [entry for entry in history if isinstance(entry, dict)]
    entries = [_entry_view(entry) for entry in valid]

    last_run = "--:--"
    if valid:
        last_run = format_relative_time(parse_iso(valid[0].get("time")), current)

    return {
        "version": VERSION,
        "has_kv": has_kv,
        "accounts": [
            _account_view(account, statuses.get(account.id), current) for account in accounts
        ],
        "entries": entries,
        "total_runs": len(entries),
        "success_runs": sum(1 for entry in entries if entry["success"]),
        "last_run": last_run,
    }
