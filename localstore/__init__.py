"""
localstore - 轻量级本地键值存储

将内存中的 键 -> 对象 映射持久化为磁盘上的单个文件，无需任何配置即可
跨进程重启保存对象。

用法:
    from localstore import LocalStorage, LocalStorageConfiguration

    with LocalStorage(LocalStorageConfiguration()) as storage:
        storage.store("numbers", [1, 2, 3])
        evens = storage.query("numbers", int, lambda n: n % 2 == 0)
"""

from .config import LocalStorageConfiguration, get_local_store_file_path
from .core import LocalStorage
from .domain import (
    LocalStorageError,
    ConfigurationError,
    InvalidArgumentError,
    KeyNotFoundError,
    SerializationError,
    CipherError,
)

__version__ = "1.0.0"

__all__ = [
    'LocalStorage',
    'LocalStorageConfiguration',
    'get_local_store_file_path',
    'LocalStorageError',
    'ConfigurationError',
    'InvalidArgumentError',
    'KeyNotFoundError',
    'SerializationError',
    'CipherError',
]
