"""Koyeb 多账户保活服务"""

from koyeb_keepalive.config.constants import VERSION

__version__ = VERSION
