"""
LocalStorage 存储引擎

在内存中维护 键 -> 载荷 的映射，并按需与磁盘上的单个快照文件同步。

用法:
    from localstore import LocalStorage, LocalStorageConfiguration

    config = LocalStorageConfiguration(filename=".app-state")
    with LocalStorage(config) as storage:
        storage.store("user", {"name": "alice", "age": 30})
        user = storage.get("user")

    # 退出 with 块时（auto_save=True）自动持久化
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from localstore import config as store_config
from localstore.config import LocalStorageConfiguration
from localstore.domain.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    KeyNotFoundError,
    SerializationError,
)
from localstore.domain.interfaces import ICipher, ICodec
from localstore.infrastructure.codec import JsonCodec
from localstore.infrastructure.crypto import AesCipher
from localstore.infrastructure.persistence import SnapshotFile
from localstore.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class LocalStorage:
    """
    轻量级本地键值存储

    状态: 已构造 -> 可操作 -> 已关闭。
    除 persist 的写文件过程外不做任何同步，调用方负责线程使用方式。
    """

    def __init__(
        self,
        configuration: Optional[LocalStorageConfiguration],
        encryption_key: Optional[str] = "",
        codec: Optional[ICodec] = None,
        cipher: Optional[ICipher] = None,
    ):
        """
        初始化存储引擎

        Args:
            configuration: 引擎配置（必需）
            encryption_key: 加密密钥，启用加密时必须非空
            codec: 值编解码器，默认 JsonCodec
            cipher: 加密器，默认 AesCipher

        Raises:
            ConfigurationError: 配置缺失，或启用加密但未提供密钥
        """
        if configuration is None:
            raise ConfigurationError('configuration', "必须提供 LocalStorageConfiguration")

        self._config = configuration
        self._encryption_key: Optional[str] = None

        if configuration.enable_encryption:
            if not encryption_key:
                raise ConfigurationError(
                    'encryption_key',
                    "When EnableEncryption is enabled, an encryptionKey is required "
                    "when initializing the LocalStorage."
                )
            self._encryption_key = encryption_key

        self._codec: ICodec = codec or JsonCodec()
        self._cipher: ICipher = cipher or AesCipher()
        self._file = SnapshotFile(configuration.filename)
        self._storage: Dict[str, str] = {}
        self._closed = False

        if configuration.auto_load:
            self.load()

    @classmethod
    def with_defaults(cls, encryption_key: Optional[str] = "") -> "LocalStorage":
        """使用全局默认配置创建引擎"""
        return cls(store_config.default_config, encryption_key)

    # ============================================================
    # 属性
    # ============================================================

    @property
    def configuration(self) -> LocalStorageConfiguration:
        return self._config

    @property
    def count(self) -> int:
        """当前条目数"""
        return len(self._storage)

    @property
    def file_path(self):
        """快照文件路径"""
        return self._file.path

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._storage)

    def __contains__(self, key: object) -> bool:
        return key in self._storage

    # ============================================================
    # 读写
    # ============================================================

    def store(self, key: str, value: Any, preserve_cycles: bool = False) -> None:
        """
        存储对象

        Args:
            key: 唯一键，非空
            value: 任意可序列化对象，不能为 None
            preserve_cycles: True 时丢弃循环引用而不是报错

        Raises:
            InvalidArgumentError: 键为空或值为 None
            SerializationError: 序列化失败（包括 preserve_cycles=False 时的循环引用）
        """
        if not key:
            raise InvalidArgumentError('key', "键不能为空")
        if value is None:
            raise InvalidArgumentError('value', "值不能为 None")

        payload = self._codec.serialize(value, preserve_cycles=preserve_cycles)

        # 空载荷被忽略，已有条目保持不变
        if payload == "":
            logger.warning("序列化结果为空，忽略写入: %s", key)
            return

        if self._encryption_key is not None:
            payload = self._cipher.encrypt(self._encryption_key, self._config.encryption_salt, payload)

        self._storage[key] = payload

    def get(self, key: str) -> Any:
        """
        获取对象（不指定类型）

        Returns:
            解码后的原始结构: dict / list / str / int / float / bool / None

        Raises:
            KeyNotFoundError: 键不存在
        """
        return self._codec.deserialize(self._read_payload(key))

    def get_as(self, key: str, cls: Type[T]) -> T:
        """
        获取强类型对象

        Args:
            key: 存储时使用的键
            cls: 目标类型，支持 dataclass 与 typing 泛型

        Raises:
            KeyNotFoundError: 键不存在
            SerializationError: 无法转换为目标类型
        """
        return self._codec.deserialize(self._read_payload(key), cls)

    def _read_payload(self, key: str) -> str:
        try:
            raw = self._storage[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

        if self._encryption_key is not None:
            raw = self._cipher.decrypt(self._encryption_key, self._config.encryption_salt, raw)
        return raw

    def exists(self, key: str) -> bool:
        """是否包含指定键"""
        return key in self._storage

    def keys(self) -> Tuple[str, ...]:
        """所有键（升序，只读）"""
        return tuple(sorted(self._storage))

    def query(
        self,
        key: str,
        item_type: Any = Any,
        predicate: Optional[Callable[[Any], bool]] = None,
    ) -> List[Any]:
        """
        以列表形式获取集合，并按条件过滤

        Args:
            key: 集合所在的键
            item_type: 元素类型
            predicate: 过滤条件，None 时返回全部元素

        Raises:
            KeyNotFoundError: 键不存在
            SerializationError: 值不是 item_type 的序列
        """
        collection = self.get_as(key, List[item_type])
        if predicate is None:
            return collection
        return [item for item in collection if predicate(item)]

    def clear(self) -> None:
        """清空内存中的数据，磁盘文件保持不变（删除文件请用 destroy）"""
        self._storage.clear()

    def destroy(self) -> None:
        """删除磁盘上的快照文件，内存数据保持不变（清空内存请用 clear）"""
        self._file.delete()

    # ============================================================
    # 加载与持久化
    # ============================================================

    def load(self) -> None:
        """
        从磁盘加载，整体覆盖内存中的数据

        文件不存在或为空时不做任何操作。未持久化的内存修改会丢失。

        Raises:
            SerializationError: 文件内容损坏
        """
        try:
            content = self._file.read()
        except UnicodeDecodeError as e:
            raise SerializationError(f"快照文件损坏: {self._file.path}", e) from e

        if not content:
            return

        try:
            data = json.loads(content)
        except ValueError as e:
            raise SerializationError(f"快照文件损坏: {self._file.path}", e) from e

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise SerializationError(f"快照文件格式无效: {self._file.path}")

        self._storage = data
        logger.debug("已加载 %d 个条目: %s", len(data), self._file.path)

    def persist(self) -> None:
        """将内存中的全部数据整体写入磁盘"""
        snapshot = dict(self._storage)
        serialized = json.dumps(snapshot, indent=2, ensure_ascii=False)
        self._file.write(serialized)
        logger.debug("已持久化 %d 个条目", len(snapshot))

    # ============================================================
    # 删除（先从磁盘刷新，再修改并持久化）
    # ============================================================

    def delete_data_for_key(self, key: str) -> bool:
        """
        删除指定键

        Returns:
            是否实际删除
        """
        self.load()
        if key not in self._storage:
            return False

        del self._storage[key]
        self.persist()
        return True

    def delete_data_for_partial_key(self, key_part: str) -> Tuple[int, int]:
        """
        删除所有包含 key_part 的键

        注意: 选择过短的片段可能删除比预期更多的数据。

        Returns:
            (匹配数, 删除数)
        """
        if not key_part:
            return 0, 0

        self.load()
        found_keys = [k for k in self.keys() if key_part in k]

        removed = 0
        for key in found_keys:
            if key in self._storage:
                del self._storage[key]
                removed += 1
                self.persist()

        return len(found_keys), removed

    def delete_data_for_all_keys(self, keys: Iterable[str]) -> bool:
        """
        删除所有给定的键

        Returns:
            请求数是否等于删除数；输入包含重复键时即使全部删除也返回 False
        """
        if keys is None:
            raise InvalidArgumentError('keys', "键列表不能为 None")
        if isinstance(keys, str):
            raise InvalidArgumentError('keys', "键列表不能是单个字符串")

        keys = list(keys)
        self.load()

        removed = 0
        for key in keys:
            if key in self._storage:
                del self._storage[key]
                removed += 1
                self.persist()

        return len(keys) == removed

    # ============================================================
    # 生命周期
    # ============================================================

    def close(self) -> None:
        """关闭引擎；auto_save 时持久化一次，重复调用无效"""
        if self._closed:
            return
        self._closed = True

        if self._config.auto_save:
            self.persist()
            logger.success("LocalStorage 已保存: %s", self._file.path)

    def __enter__(self) -> "LocalStorage":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LocalStorage(filename={self._config.filename!r}, count={self.count})"
