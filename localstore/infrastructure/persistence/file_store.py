"""
持久化文件适配器 - 基础设施层

负责整份快照文件的读取、写入与删除。
同一进程内对同一文件的写入通过按路径划分的互斥锁串行化。
"""

import os
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from localstore.config import get_local_store_file_path
from localstore.utils.logger import get_logger

logger = get_logger(__name__)


# 文件路径 -> 写锁
_write_locks: Dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def get_write_lock(path: Union[str, Path]) -> threading.Lock:
    """获取指定文件的写锁（同一路径始终返回同一把锁）"""
    lock_key = os.path.abspath(os.fspath(path))
    with _registry_lock:
        lock = _write_locks.get(lock_key)
        if lock is None:
            lock = threading.Lock()
            _write_locks[lock_key] = lock
        return lock


class SnapshotFile:
    """快照文件管理器"""

    def __init__(self, filename: str):
        self.filename = filename
        self.path = get_local_store_file_path(filename)
        self._lock = get_write_lock(self.path)

    def read(self) -> Optional[str]:
        """
        读取整个文件

        Returns:
            文件内容；文件不存在时返回 None
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            logger.debug("快照文件不存在: %s", self.path)
            return None

    def write(self, content: str) -> None:
        """
        整体覆盖写入文件（不存在则创建）

        锁只覆盖 打开-写入-关闭 这一段。
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with self._lock:
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(content)
                f.flush()

        logger.debug("已写入快照文件: %s (%d 字符)", self.path, len(content))

    def delete(self) -> bool:
        """
        删除文件

        Returns:
            是否实际删除了文件；文件不存在时返回 False，其他错误向上抛出
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.info("已删除快照文件: %s", self.path)
        return True
