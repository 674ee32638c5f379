"""
Pytest 配置文件

提供测试所需的 fixtures 和共享配置。
"""

import sys
from pathlib import Path

import pytest

# 确保项目根目录在 Python 路径中
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# ============================================================
# 存储目录隔离
# ============================================================

@pytest.fixture(autouse=True)
def storage_dir(tmp_path, monkeypatch):
    """每个测试使用独立的存储目录"""
    monkeypatch.setenv('LOCALSTORE_DIR', str(tmp_path))
    return tmp_path


# ============================================================
# LocalStorage Fixtures
# ============================================================

@pytest.fixture
def config():
    """默认配置（固定文件名）"""
    from localstore import LocalStorageConfiguration
    return LocalStorageConfiguration(filename='.test-localstorage')


@pytest.fixture
def encrypted_config():
    """启用加密的配置"""
    from localstore import LocalStorageConfiguration
    return LocalStorageConfiguration(
        filename='.test-encrypted',
        enable_encryption=True,
        encryption_salt='test-salt',
    )


@pytest.fixture
def fast_cipher():
    """低迭代次数的加密器，加快测试"""
    from localstore.infrastructure.crypto import AesCipher
    return AesCipher(iterations=1_000)


@pytest.fixture
def storage(config):
    """LocalStorage 实例"""
    from localstore import LocalStorage
    return LocalStorage(config)


@pytest.fixture
def encrypted_storage(encrypted_config, fast_cipher):
    """启用加密的 LocalStorage 实例"""
    from localstore import LocalStorage
    return LocalStorage(encrypted_config, 'super-secret', cipher=fast_cipher)


# ============================================================
# Test Utilities
# ============================================================

@pytest.fixture
def read_backing_file(storage_dir):
    """读取快照文件内容"""
    def _read(filename='.test-localstorage'):
        return (storage_dir / filename).read_text(encoding='utf-8')
    return _read
