"""FastAPI 依赖"""

from fastapi import Depends

from koyeb_keepalive.config.settings import Settings, get_settings
from koyeb_keepalive.core.kv import get_kv_store
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.status_store import StatusStore


def get_status_store(settings: Settings = Depends(get_settings)) -> StatusStore:
    """每个请求共享同一个进程级 KV 存储"""
    return StatusStore(get_kv_store(), log_limit=settings.log_limit)


def get_keepalive_service(
    status_store: StatusStore = Depends(get_status_store),
) -> KeepAliveService:
    return KeepAliveService(status_store)
