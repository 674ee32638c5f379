# Infrastructure

"""
基础设施层 - 编解码、加密与文件持久化的具体实现
"""

from .codec import JsonCodec
from .crypto import AesCipher
from .persistence import SnapshotFile

__all__ = [
    'JsonCodec',
    'AesCipher',
    'SnapshotFile',
]
