"""账户配置解析服务"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from koyeb_keepalive.config.settings import Settings
from koyeb_keepalive.models.account import Account

logger = logging.getLogger(__name__)

LEGACY_ACCOUNT_NAME = "Default Account"


class ConfigParseError(ValueError):
    """配置无法解析"""


@dataclass
class AccountConfig:
    """
    原始账户配置

    每个字段可以是 JSON 字符串，也可以是已解析的 Python 对象。
    """

    tokens: Any = None  # [{name?, token, appUrl?}, ...]
    token: str | None = None  # 旧格式单账户
    app_url: str | None = None  # 旧格式单账户 App URL
    app_urls: Any = None  # {name: url}


@dataclass
class RegistryResult:
    """解析结果"""

    accounts: list[Account] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.accounts)


def _load_json(value: Any) -> Any:
    """解析 JSON 字符串；非字符串原样返回"""
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except ValueError as e:
        raise ConfigParseError(str(e)) from e


def _as_text(value: Any) -> str | None:
    """非空值统一转为字符串，空值返回 None"""
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


def _accounts_from_list(items: list) -> list[Account]:
    """列表格式：按顺序生成 acc_1, acc_2 ..."""
    accounts = []
    for index, item in enumerate(items, start=1):
        # 缺字段的条目原样保留
        entry = item if isinstance(item, dict) else {}
        accounts.append(Account(
            id=f"acc_{index}",
            name=_as_text(entry.get("name")) or f"Account {index}",
            token=entry.get("token"),
            app_url=_as_text(entry.get("appUrl")),
        ))
    return accounts


def _merge_app_urls(accounts: list[Account], raw_app_urls: Any) -> None:
    """按账户名补充 App URL，不覆盖已配置的值"""
    try:
        app_urls = _load_json(raw_app_urls)
    except ConfigParseError as e:
        logger.warning(f"解析 KOYEB_APP_URLS 失败: {e}")
        return

    if not isinstance(app_urls, dict):
        return

    # 映射的 key 统一按字符串比较
    by_name = {str(name): _as_text(url) for name, url in app_urls.items()}
    for account in accounts:
        mapped = by_name.get(account.name)
        if mapped and not account.app_url:
            account.app_url = mapped


def resolve_accounts(config: AccountConfig) -> RegistryResult:
    """
    解析多账户配置

    1. 列表格式非空时按列表生成账户
    2. 否则使用旧格式单账户（acc_1 / Default Account）
    3. 如有 name→URL 映射，补充缺失的 App URL

    列表格式无法解析时整个解析结果为空，不抛出异常。

    Args:
        config: 原始账户配置

    Returns:
        解析结果，error 非空表示配置错误
    """
    accounts: list[Account] = []

    try:
        tokens = _load_json(config.tokens)
    except ConfigParseError as e:
        logger.error(f"解析账户配置失败: {e}")
        return RegistryResult(accounts=[], error=f"Failed to parse accounts config: {e}")

    if isinstance(tokens, list):
        accounts = _accounts_from_list(tokens)

    if not accounts and config.token:
        accounts = [Account(
            id="acc_1",
            name=LEGACY_ACCOUNT_NAME,
            token=config.token,
            app_url=_as_text(config.app_url),
        )]

    if config.app_urls:
        _merge_app_urls(accounts, config.app_urls)

    if not accounts:
        return RegistryResult(accounts=[], error="No accounts configured")

    return RegistryResult(accounts=accounts)


def load_accounts(settings: Settings) -> RegistryResult:
    """从配置读取账户列表（每次调用都重新解析）"""
    return resolve_accounts(AccountConfig(
        tokens=settings.koyeb_tokens,
        token=settings.koyeb_token,
        app_url=settings.koyeb_app_url,
        app_urls=settings.koyeb_app_urls,
    ))
