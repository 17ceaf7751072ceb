"""业务服务模块"""

from koyeb_keepalive.services.account_registry import (
    AccountConfig,
    RegistryResult,
    load_accounts,
    resolve_accounts,
)
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.network import NetworkService
from koyeb_keepalive.services.status_store import StatusStore

__all__ = [
    "AccountConfig",
    "RegistryResult",
    "resolve_accounts",
    "load_accounts",
    "KeepAliveService",
    "NetworkService",
    "StatusStore",
]
