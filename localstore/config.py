"""
localstore 配置中心

集中管理存储引擎的可配置参数，支持从环境变量读取默认值。

用法:
    from localstore.config import LocalStorageConfiguration, default_config

    # 自定义配置
    config = LocalStorageConfiguration(filename=".settings", auto_save=False)

    # 从环境变量构建
    config = LocalStorageConfiguration.from_env()
"""

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_FILENAME = ".localstorage"
DEFAULT_ENCRYPTION_SALT = "(LocalStorage)"

# 存储目录环境变量（未设置时使用当前工作目录）
STORAGE_DIR_ENV = "LOCALSTORE_DIR"


@dataclass(frozen=True)
class LocalStorageConfiguration:
    """
    存储引擎配置

    构造后不可修改，引擎运行期间不支持重新配置。

    Attributes:
        auto_load: 构造引擎时自动从磁盘加载
        auto_save: 关闭引擎时自动持久化到磁盘
        filename: 持久化文件名（位于存储目录下）
        enable_encryption: 启用后每个值都经过加密，且必须提供加密密钥
        encryption_salt: 传递给加密器的盐值
    """
    auto_load: bool = True
    auto_save: bool = True
    filename: str = DEFAULT_FILENAME
    enable_encryption: bool = False
    encryption_salt: str = DEFAULT_ENCRYPTION_SALT

    @classmethod
    def from_env(cls) -> "LocalStorageConfiguration":
        """从环境变量构建配置，无效值回退为默认值"""
        return cls(
            auto_load=_get_env_bool('LOCALSTORE_AUTO_LOAD', True),
            auto_save=_get_env_bool('LOCALSTORE_AUTO_SAVE', True),
            filename=_get_env_str('LOCALSTORE_FILENAME', DEFAULT_FILENAME),
            enable_encryption=_get_env_bool('LOCALSTORE_ENABLE_ENCRYPTION', False),
            encryption_salt=_get_env_str('LOCALSTORE_ENCRYPTION_SALT', DEFAULT_ENCRYPTION_SALT),
        )


_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key)
    if value:
        value = value.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
    return default


def _get_env_str(key: str, default: str) -> str:
    """从环境变量获取字符串配置（空字符串视为未设置）"""
    value = os.environ.get(key)
    if value:
        return value
    return default


# ============================================================
# 存储路径
# ============================================================

def get_storage_dir() -> Path:
    """
    获取存储目录

    优先使用 LOCALSTORE_DIR 环境变量，否则为当前工作目录。
    每次调用时重新解析。
    """
    value = os.environ.get(STORAGE_DIR_ENV)
    if value:
        return Path(value)
    return Path.cwd()


def get_local_store_file_path(filename: str) -> Path:
    """
    获取持久化文件的完整路径

    Args:
        filename: 配置中的文件名

    Returns:
        存储目录下的文件路径
    """
    return get_storage_dir() / filename


# ============================================================
# 全局配置实例
# ============================================================

default_config = LocalStorageConfiguration.from_env()


def reload_config():
    """
    重新加载配置

    从环境变量重新读取默认配置。
    """
    global default_config

    default_config = LocalStorageConfiguration.from_env()
