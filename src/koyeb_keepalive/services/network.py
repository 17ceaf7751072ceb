"""网络服务"""

import logging
import time

from curl_cffi.requests import AsyncSession

from koyeb_keepalive.config.constants import DEFAULT_HTTP_HEADERS
from koyeb_keepalive.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class NetworkService:
    """网络服务（App URL 探测）"""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def ping(self, url: str) -> dict:
        """
        GET 请求 App URL，尽力而为

        如果配置了 SOCKS5 代理，则请求会走代理。

        Returns:
            结果字典: status_code (int | None), duration (毫秒), error (str | None)
        """
        proxy_kwargs = self.settings.curl_proxy or {}

        start = time.perf_counter()
        try:
            async with AsyncSession(
                impersonate=self.settings.impersonate_browser,
                **proxy_kwargs,
            ) as session:
                response = await session.get(url, headers=DEFAULT_HTTP_HEADERS.copy())
                duration = int((time.perf_counter() - start) * 1000)
                logger.debug(f"App Ping {url}: HTTP {response.status_code} ({duration}ms)")
                return {
                    "status_code": response.status_code,
                    "duration": duration,
                    "error": None,
                }

        except Exception as e:
            logger.warning(f"App Ping 异常 {url}: {e}")
            return {
                "status_code": None,
                "duration": int((time.perf_counter() - start) * 1000),
                "error": str(e),
            }
