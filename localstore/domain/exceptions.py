"""
存储引擎异常定义

所有异常继承自 LocalStorageError，便于调用方统一捕获。
"""

from typing import Optional


class LocalStorageError(Exception):
    """存储引擎基础异常"""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self):
        if self.original_error:
            return f"{self.message} (Caused by: {self.original_error})"
        return self.message


class ConfigurationError(LocalStorageError):
    """配置缺失或无效（构造引擎时抛出）"""

    def __init__(self, setting: str, message: Optional[str] = None):
        self.setting = setting
        super().__init__(message or f"配置错误: {setting}")


class InvalidArgumentError(LocalStorageError, ValueError):
    """调用参数无效，如空键或空值"""

    def __init__(self, argument: str, message: Optional[str] = None):
        self.argument = argument
        super().__init__(message or f"参数无效: {argument}")


class KeyNotFoundError(LocalStorageError, KeyError):
    """存储中不存在指定的键"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Could not find key '{key}' in the LocalStorage.")

    def __str__(self):
        # KeyError 默认会给消息加引号
        return LocalStorageError.__str__(self)


class SerializationError(LocalStorageError):
    """序列化或反序列化失败（损坏的文件、循环引用、类型不匹配）"""


class CipherError(SerializationError):
    """加解密失败，通常是密钥或盐值不匹配"""
