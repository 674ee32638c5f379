# Domain

"""
领域层 - 异常与接口

不依赖任何外部框架。
"""

from .exceptions import (
    LocalStorageError,
    ConfigurationError,
    InvalidArgumentError,
    KeyNotFoundError,
    SerializationError,
    CipherError,
)

__all__ = [
    'LocalStorageError',
    'ConfigurationError',
    'InvalidArgumentError',
    'KeyNotFoundError',
    'SerializationError',
    'CipherError',
]
