"""任务调度器"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from koyeb_keepalive.config.settings import get_settings
from koyeb_keepalive.tasks.keepalive_job import register_keepalive_job

logger = logging.getLogger(__name__)


def create_scheduler() -> AsyncIOScheduler:
    """创建调度器并注册所有定时任务"""
    settings = get_settings()
    scheduler = AsyncIOScheduler(timezone=settings.timezone)

    register_keepalive_job(scheduler)

    logger.info("所有定时任务已注册")
    return scheduler
