"""Web 应用实例"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from koyeb_keepalive.api.routes import router
from koyeb_keepalive.config.constants import VERSION
from koyeb_keepalive.config.settings import get_settings
from koyeb_keepalive.core.database import close_pool, init_database
from koyeb_keepalive.tasks.scheduler import create_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时初始化数据库并启动定时任务"""
    settings = get_settings()

    if settings.database_url:
        try:
            await init_database()
        except Exception as e:
            # 存储不可用时仍然提供服务
            logger.error(f"KV 数据库不可用: {e}")

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = create_scheduler()
        scheduler.start()
        logger.info("调度器已启动")

    try:
        yield
    finally:
        if scheduler:
            scheduler.shutdown(wait=False)
        await close_pool()
        logger.info("应用已关闭")


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    """错误处理器"""
    logger.error(f"处理请求时发生异常: {request.url.path} - {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": str(exc)},
    )


def create_app() -> FastAPI:
    """创建 Web 应用实例"""
    app = FastAPI(
        title="Koyeb Keep-Alive",
        version=VERSION,
        lifespan=lifespan,
    )

    app.include_router(router)
    app.add_exception_handler(Exception, error_handler)

    logger.info("Web 应用创建成功")
    return app
