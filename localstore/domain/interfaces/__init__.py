# Domain Interfaces

"""
领域接口 - 抽象契约定义

使用 Python Protocol (Structural Subtyping) 定义接口，
存储引擎只依赖这些契约，不依赖具体的编解码或加密实现。
"""

from .codec import ICodec
from .cipher import ICipher

__all__ = [
    'ICodec',
    'ICipher',
]
