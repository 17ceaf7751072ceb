"""工具函数模块"""

from koyeb_keepalive.utils.formatter import format_relative_time, stamp

__all__ = [
    "stamp",
    "format_relative_time",
]
