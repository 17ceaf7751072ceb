"""Koyeb 平台适配器"""

import logging
import time

from curl_cffi.requests import AsyncSession

from koyeb_keepalive.config.constants import DEFAULT_HTTP_HEADERS
from koyeb_keepalive.config.settings import Settings, get_settings
from koyeb_keepalive.sites.base import PlatformAdapter

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _extract_email(data) -> str | None:
    """从 profile 响应中取出用户邮箱"""
    if not isinstance(data, dict):
        return None
    user = data.get("user")
    if not isinstance(user, dict):
        return None
    return user.get("email") or None


class KoyebAdapter(PlatformAdapter):
    """Koyeb 平台适配器"""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def get_profile(self, token: str | None) -> dict:
        """请求 Koyeb 账户 profile 接口"""
        headers = DEFAULT_HTTP_HEADERS.copy()
        headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })
        proxy_kwargs = self.settings.curl_proxy or {}

        start = time.perf_counter()
        try:
            async with AsyncSession(
                impersonate=self.settings.impersonate_browser,
                **proxy_kwargs,
            ) as session:
                response = await session.get(self.settings.koyeb_api_url, headers=headers)
                duration = _elapsed_ms(start)

                logger.debug(f"Koyeb profile 响应: status={response.status_code} ({duration}ms)")

                if 200 <= response.status_code < 300:
                    data = response.json()
                    return {
                        "success": True,
                        "status_code": response.status_code,
                        "reason": response.reason or "",
                        "email": _extract_email(data),
                        "duration": duration,
                        "error": None,
                    }

                logger.warning(f"Koyeb API 失败: {response.status_code} {response.reason}")
                return {
                    "success": False,
                    "status_code": response.status_code,
                    "reason": response.reason or "",
                    "email": None,
                    "duration": duration,
                    "error": None,
                }

        except Exception as e:
            logger.warning(f"Koyeb API 请求异常: {e}")
            return {
                "success": False,
                "status_code": None,
                "reason": "",
                "email": None,
                "duration": _elapsed_ms(start),
                "error": str(e),
            }
