"""
日志配置模块

统一配置 loguru 的控制台输出与滚动日志文件
"""
import os
import sys
from loguru import logger

from pagebound.config.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"

_configured = False


def setup_logging():
    """
    初始化日志输出

    - 控制台：按 LOG_LEVEL 输出
    - 文件：按大小轮转，保留 LOG_RETENTION，旧日志压缩
    """
    global _configured

    if _configured:
        return

    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL, format=LOG_FORMAT)

    log_file = settings.LOG_FILE
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
            level=settings.LOG_LEVEL,
        )

    _configured = True
