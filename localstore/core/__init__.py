# Core

"""
核心模块 - 存储引擎
"""

from .local_storage import LocalStorage

__all__ = ['LocalStorage']
