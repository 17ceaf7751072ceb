"""平台适配器基类"""

from abc import ABC, abstractmethod


class PlatformAdapter(ABC):
    """平台适配器基类"""

    @abstractmethod
    async def get_profile(self, token: str | None) -> dict:
        """
        请求账户状态接口

        Args:
            token: Bearer Token

        Returns:
            结果字典，包含:
            - success (bool): 是否 2xx 且响应可解析
            - status_code (int | None): HTTP 状态码，请求异常时为 None
            - reason (str): HTTP 状态说明
            - email (str | None): 账户邮箱
            - duration (int): 请求耗时（毫秒）
            - error (str | None): 请求异常信息
        """
        pass
