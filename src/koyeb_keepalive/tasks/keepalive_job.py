"""定时保活任务"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from koyeb_keepalive.config.constants import TriggerSource
from koyeb_keepalive.config.settings import get_settings
from koyeb_keepalive.core.kv import get_kv_store
from koyeb_keepalive.models.run_result import RunSummary
from koyeb_keepalive.services.account_registry import load_accounts
from koyeb_keepalive.services.keepalive import KeepAliveService
from koyeb_keepalive.services.status_store import StatusStore

logger = logging.getLogger(__name__)

KEEPALIVE_JOB_ID = "koyeb_keepalive"


async def run_scheduled_keepalive(service: KeepAliveService | None = None) -> RunSummary | None:
    """
    定时任务入口：处理所有账户

    结果只用于持久化，异常记录日志后吞掉。
    """
    settings = get_settings()
    try:
        if service is None:
            service = KeepAliveService(StatusStore(get_kv_store(), log_limit=settings.log_limit))

        registry = load_accounts(settings)
        if not registry.ok:
            logger.warning(f"账户配置错误: {registry.error}")

        summary = await service.run(registry.accounts, source=TriggerSource.CRON.value)
        logger.info(f"定时保活完成: {'成功' if summary.success else '失败'} ({len(summary.results)} 个账户)")
        return summary

    except Exception as e:
        logger.error(f"定时保活任务错误: {e}", exc_info=True)
        return None


def register_keepalive_job(scheduler: AsyncIOScheduler):
    """
    注册保活任务

    Args:
        scheduler: 调度器实例
    """
    settings = get_settings()

    scheduler.add_job(
        run_scheduled_keepalive,
        CronTrigger.from_crontab(settings.keepalive_cron, timezone=settings.timezone),
        id=KEEPALIVE_JOB_ID,
        replace_existing=True,
        coalesce=True,
    )

    logger.info(f"保活任务已注册: cron '{settings.keepalive_cron}' ({settings.timezone})")
