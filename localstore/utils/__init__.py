"""
Utils 模块初始化文件
"""

from .logger import StoreLogger, get_logger, setup_logging, log

__all__ = [
    'StoreLogger',
    'get_logger',
    'setup_logging',
    'log',
]
