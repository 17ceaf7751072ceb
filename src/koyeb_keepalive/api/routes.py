"""HTTP 路由"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from koyeb_keepalive.api.dashboard import build_dashboard_context, templates
from koyeb_keepalive.api.deps import get_keepalive_service, get_status_store
from koyeb_keepalive.config.constants import VERSION, TriggerSource
from koyeb_keepalive.config.settings import Settings, get_settings
from koyeb_keepalive.services.account_registry import load_accounts
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.status_store import StatusStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve(settings: Settings):
    registry = load_accounts(settings)
    if not registry.ok:
        logger.warning(f"账户配置错误: {registry.error}")
    return registry.accounts


@router.get("/api/trigger")
async def trigger_all(
    settings: Settings = Depends(get_settings),
    service: KeepAliveService = Depends(get_keepalive_service),
):
    """手动触发 - 所有账户"""
    summary = await service.run(_resolve(settings), source=TriggerSource.DASHBOARD.value)
    return summary.to_dict()


@router.get("/api/trigger-account")
async def trigger_account(
    id: str | None = None,
    settings: Settings = Depends(get_settings),
    service: KeepAliveService = Depends(get_keepalive_service),
):
    """手动触发单个账户"""
    if not id:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "No account ID provided"},
        )

    summary = await service.run(
        _resolve(settings),
        account_id=id,
        source=TriggerSource.SINGLE_ACCOUNT.value,
    )
    return summary.to_dict()


@router.get("/api/accounts")
async def list_accounts(settings: Settings = Depends(get_settings)):
    """获取账户列表"""
    return [account.to_dict() for account in _resolve(settings)]


@router.get("/api/account-status")
async def account_status(status_store: StatusStore = Depends(get_status_store)):
    """获取账户状态"""
    return await status_store.get_account_status()


@router.get("/api/logs")
async def run_logs(status_store: StatusStore = Depends(get_status_store)):
    """获取历史日志"""
    return await status_store.get_history()


@router.get("/api/health")
async def health(
    settings: Settings = Depends(get_settings),
    status_store: StatusStore = Depends(get_status_store),
):
    return {
        "status": "ok",
        "version": VERSION,
        "accounts": len(_resolve(settings)),
        "kv": status_store.available,
    }


@router.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(
    request: Request,
    path: str,
    settings: Settings = Depends(get_settings),
    status_store: StatusStore = Depends(get_status_store),
):
    """默认返回 Dashboard 页面"""
    context = build_dashboard_context(
        accounts=_resolve(settings),
        statuses=await status_store.get_account_status(),
        history=await status_store.get_history(),
        has_kv=status_store.available,
    )
    return templates.TemplateResponse(request, "dashboard.html", context)
