"""
localstore 日志系统

提供统一的日志接口，支持:
- 标准 Python logging 模块
- success 级别（持久化成功等事件）
- 文件日志输出

用法:
    from localstore.utils.logger import get_logger, setup_logging

    # 初始化日志系统（应用启动时调用，库本身不会主动调用）
    setup_logging()

    # 获取模块日志器
    logger = get_logger(__name__)
    logger.debug("已加载 %d 个条目", 3)
    logger.success("持久化完成")
"""

import logging
import sys
from typing import Optional, Literal
from pathlib import Path


# 日志级别类型
LogLevel = Literal["debug", "info", "success", "warning", "error", "critical"]

# 日志格式
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TIME_FORMAT = "%H:%M:%S"

# 自定义 success 级别（25，介于 INFO=20 和 WARNING=30 之间）
SUCCESS_LEVEL = 25


class StoreLogger:
    """
    localstore 日志封装

    在标准 logging 基础上增加:
    - success 级别
    - 延迟格式化参数（与 logging 相同的 % 风格）
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

        # 注册 success 级别
        if logging.getLevelName(SUCCESS_LEVEL) != 'SUCCESS':
            logging.addLevelName(SUCCESS_LEVEL, 'SUCCESS')

    def debug(self, message: str, *args):
        self.logger.debug(message, *args)

    def info(self, message: str, *args):
        self.logger.info(message, *args)

    def success(self, message: str, *args):
        """成功级别日志"""
        self.logger.log(SUCCESS_LEVEL, message, *args)

    def warning(self, message: str, *args):
        self.logger.warning(message, *args)

    def error(self, message: str, *args):
        self.logger.error(message, *args)

    def exception(self, message: str, *args):
        """错误日志，附带当前异常堆栈"""
        self.logger.exception(message, *args)

    def critical(self, message: str, *args):
        self.logger.critical(message, *args)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT
):
    """
    初始化日志系统

    Args:
        level: 日志级别
        log_file: 日志文件路径（可选）
        format_string: 日志格式
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # 文件日志
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=TIME_FORMAT,
        handlers=handlers,
        force=True
    )


def get_logger(name: str) -> StoreLogger:
    """
    获取 localstore 日志器

    Args:
        name: 日志器名称（通常为 __name__）

    Returns:
        StoreLogger 实例
    """
    return StoreLogger(name)


# 便捷的默认日志器
_default_logger: Optional[StoreLogger] = None


def log(message: str, level: LogLevel = "info"):
    """
    便捷的日志函数

    Args:
        message: 日志消息
        level: 日志级别
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = get_logger("localstore")

    log_method = getattr(_default_logger, level, _default_logger.info)
    log_method(message)
