"""平台适配器模块"""

from koyeb_keepalive.sites.base import PlatformAdapter
from koyeb_keepalive.sites.koyeb import KoyebAdapter

__all__ = [
    "PlatformAdapter",
    "KoyebAdapter",
]
