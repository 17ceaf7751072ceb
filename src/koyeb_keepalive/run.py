"""服务启动入口（日志配置）"""

import logging
import sys

from koyeb_keepalive.config.settings import get_settings
from koyeb_keepalive.core.timezone import get_timezone


class Colors:
    """ANSI 颜色代码"""
    RESET = "\033[0m"
    BOLD = "\033[1m"


# 日志级别颜色映射
LOG_COLORS = {
    logging.DEBUG: "\033[38;5;245m",      # 灰色
    logging.INFO: "\033[38;5;79m",        # 青绿色
    logging.WARNING: "\033[38;5;221m",    # 橙黄
    logging.ERROR: "\033[38;5;203m",      # 红
    logging.CRITICAL: "\033[1;38;5;203m", # 粗体红
}

# 日志级别名称映射（等宽对齐）
LOG_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO ",
    logging.WARNING: "WARN ",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRIT ",
}


class ColorFormatter(logging.Formatter):
    """带颜色和对齐的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        """使用配置时区的时间格式化器"""
        from datetime import datetime

        dt = datetime.fromtimestamp(record.created, tz=get_timezone())
        return dt.strftime(datefmt or "%Y-%m-%d %H:%M:%S")

    def format(self, record):
        """格式化日志记录，添加颜色"""
        level_color = LOG_COLORS.get(record.levelno, "")
        record.levelname = LOG_LEVEL_NAMES.get(record.levelno, record.levelname)

        result = super().format(record)

        if level_color:
            result = f"{level_color}{result}{Colors.RESET}"
        return result


def setup_logging():
    """按配置的日志级别初始化根日志"""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for handler in logging.root.handlers:
        handler.setFormatter(ColorFormatter(
            fmt="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    # 隐藏冗余的日志
    logging.getLogger("apscheduler.executors.default").setLevel(logging.WARNING)
    logging.getLogger("apscheduler.scheduler").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.INFO)


def main():
    """启动服务"""
    import uvicorn

    from koyeb_keepalive.api.app import create_app

    setup_logging()
    settings = get_settings()

    logger = logging.getLogger(__name__)
    logger.info(f"正在启动服务... ({settings.host}:{settings.port})")

    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
