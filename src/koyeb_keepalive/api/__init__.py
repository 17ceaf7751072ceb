"""HTTP 接口模块"""

from koyeb_keepalive.api.app import create_app

__all__ = ["create_app"]
