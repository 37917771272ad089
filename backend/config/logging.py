"""
日志配置模块

统一使用 loguru：控制台输出 + 可选的滚动日志文件，
并把标准库 logging（uvicorn、sqlalchemy）转发到 loguru
"""

import logging
import os
import sys
from typing import Optional

from loguru import logger

from backend.config.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[request_id]} | {name}:{function}:{line} | {message}"

# 需要转发到 loguru 的标准库 logger
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """把标准库 logging 的记录转交给 loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # 回溯到真正发出日志的调用栈
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    初始化日志

    Args:
        level: 日志级别，默认读取配置
        log_file: 日志文件路径，默认读取配置（为空则只输出到控制台）
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, backtrace=False)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        logger.add(
            log_file,
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression="zip",
            format=LOG_FORMAT,
            level=level,
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.debug(f"Logging configured (level={level}, file={log_file or '-'})")
