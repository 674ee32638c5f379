"""
持久化基础设施模块

提供快照文件的读写与删除。
"""
from .file_store import SnapshotFile, get_write_lock

__all__ = ['SnapshotFile', 'get_write_lock']
