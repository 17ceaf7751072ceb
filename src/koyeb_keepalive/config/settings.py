"""配置管理模块"""

import logging

from pydantic import Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings

from koyeb_keepalive.config.constants import DEFAULT_LOG_LIMIT, KOYEB_PROFILE_API


class Settings(BaseSettings):
    """应用配置类"""

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ==================== 账户配置 ====================
    koyeb_tokens: str = Field(default="", alias="KOYEB_TOKENS", description="多账户配置（JSON 数组）")
    koyeb_token: str = Field(default="", alias="KOYEB_TOKEN", description="单账户 Token（旧格式）")
    koyeb_app_url: str = Field(default="", alias="KOYEB_APP_URL", description="单账户 App URL（旧格式）")
    koyeb_app_urls: str = Field(default="", alias="KOYEB_APP_URLS", description="账户名到 App URL 的映射（JSON 对象）")
    koyeb_api_url: str = Field(default=KOYEB_PROFILE_API, alias="KOYEB_API_URL", description="账户状态 API 地址")

    # ==================== 存储配置 ====================
    database_url: str = Field(default="", alias="DATABASE_URL", description="PostgreSQL 连接字符串（KV 存储）")
    memory_kv: bool = Field(default=False, alias="MEMORY_KV", description="未配置数据库时使用内存 KV")
    log_limit: int = Field(default=DEFAULT_LOG_LIMIT, alias="LOG_LIMIT", description="保存最近多少条日志")

    # ==================== 调度配置 ====================
    keepalive_cron: str = Field(default="*/30 * * * *", alias="KEEPALIVE_CRON", description="保活任务 crontab 表达式")
    scheduler_enabled: bool = Field(default=True, alias="SCHEDULER_ENABLED", description="是否启用定时任务")
    timezone: str = Field(default="Asia/Shanghai", alias="TIMEZONE", description="时区配置")

    # ==================== 服务配置 ====================
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # ==================== 网络配置 ====================
    socks5_proxy: str = Field(default="", alias="SOCKS5_PROXY", description="SOCKS5 代理地址")
    impersonate_browser: str = Field(default="chrome136", alias="IMPERSONATE_BROWSER", description="curl_cffi 模拟浏览器版本")

    # ==================== 日志配置 ====================
    log_level_str: str = Field(default="INFO", alias="LOG_LEVEL", description="日志级别: DEBUG, INFO, WARNING, ERROR")

    @field_validator("log_level_str")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("log_limit")
    @classmethod
    def validate_log_limit(cls, v: int) -> int:
        """验证日志上限"""
        if v < 1:
            raise ValueError(f"log_limit must be >= 1, got {v}")
        return v

    @property
    def log_level(self) -> int:
        """获取日志级别常量"""
        return getattr(logging, self.log_level_str)

    @property
    def has_kv(self) -> bool:
        """是否绑定了 KV 存储"""
        return bool(self.database_url) or self.memory_kv

    @property
    def curl_proxy(self) -> dict | None:
        """
        获取用于 curl_cffi 的代理配置

        使用 socks5h:// 协议（对应 curl 的 --socks5-hostname），
        让代理服务器进行 DNS 解析。

        Returns:
            代理配置字典，未配置时返回 None
        """
        if not self.socks5_proxy:
            return None

        proxy_url = self.socks5_proxy
        if proxy_url.startswith("socks5://"):
            proxy_url = proxy_url.replace("socks5://", "socks5h://", 1)

        return {"proxies": {"http": proxy_url, "https": proxy_url}}


# 全局配置实例
_settings: Settings | None = None


def get_settings() -> Settings:
    """获取配置实例（单例模式）"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
