"""
JSON 编解码器 - 基础设施层

负责将任意对象图转换为 JSON 字符串载荷，以及按目标类型还原。

支持的类型:
- 基础类型: None / bool / int / float / str
- 容器: dict / list / tuple / set / frozenset
- dataclass 与带 __dict__ 的普通对象（忽略下划线开头的属性）
- datetime / date / time (ISO 格式) 、Enum (取 value)
"""

import collections.abc
import dataclasses
import json
import types
import typing
from datetime import date, datetime, time
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Optional, Set, Union
from uuid import UUID

from localstore.domain.exceptions import SerializationError


# 丢弃的循环引用（preserve_cycles=True 时使用）
_DROP = object()

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_SET_ORIGINS = (set, frozenset, collections.abc.Set, collections.abc.MutableSet)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


class JsonCodec:
    """JSON 编解码器"""

    def __init__(self, indent: Optional[int] = None, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    # ============================================================
    # 序列化
    # ============================================================

    def serialize(self, value: Any, preserve_cycles: bool = False) -> str:
        """
        序列化值为 JSON 字符串

        Args:
            value: 任意对象或集合
            preserve_cycles: True 时丢弃指向祖先对象的引用，False 时遇到循环引用报错

        Raises:
            SerializationError: 循环引用或不支持的类型
        """
        try:
            plain = self._to_plain(value, preserve_cycles, set())
        except RecursionError as e:
            raise SerializationError("对象嵌套过深，无法序列化", e) from e

        if plain is _DROP:
            return ""

        try:
            return json.dumps(plain, indent=self.indent, ensure_ascii=self.ensure_ascii)
        except (TypeError, ValueError) as e:
            raise SerializationError("JSON 编码失败", e) from e

    def _to_plain(self, obj: Any, preserve_cycles: bool, ancestors: Set[int]) -> Any:
        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        if isinstance(obj, Enum):
            return self._to_plain(obj.value, preserve_cycles, ancestors)
        if isinstance(obj, (datetime, date, time)):
            return obj.isoformat()
        if isinstance(obj, (UUID, PurePath)):
            return str(obj)

        marker = id(obj)
        if marker in ancestors:
            if preserve_cycles:
                return _DROP
            raise SerializationError(f"检测到循环引用: {type(obj).__name__}")

        ancestors.add(marker)
        try:
            if isinstance(obj, collections.abc.Mapping):
                return self._plain_mapping(obj.items(), preserve_cycles, ancestors)
            if isinstance(obj, (list, tuple, set, frozenset)):
                items = (self._to_plain(item, preserve_cycles, ancestors) for item in obj)
                return [item for item in items if item is not _DROP]
            if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                pairs = ((f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj))
                return self._plain_mapping(pairs, preserve_cycles, ancestors)
            if hasattr(obj, '__dict__') and not isinstance(obj, type):
                pairs = ((k, v) for k, v in vars(obj).items() if not k.startswith('_'))
                return self._plain_mapping(pairs, preserve_cycles, ancestors)
        finally:
            ancestors.discard(marker)

        raise SerializationError(f"不支持序列化的类型: {type(obj).__name__}")

    def _plain_mapping(self, pairs, preserve_cycles: bool, ancestors: Set[int]) -> Dict[str, Any]:
        result = {}
        for key, value in pairs:
            plain = self._to_plain(value, preserve_cycles, ancestors)
            if plain is _DROP:
                continue
            result[_key_to_str(key)] = plain
        return result

    # ============================================================
    # 反序列化
    # ============================================================

    def deserialize(self, payload: str, cls: Optional[Any] = None) -> Any:
        """
        反序列化 JSON 字符串

        Args:
            payload: JSON 字符串
            cls: 目标类型，支持 typing 泛型（List[int]、Dict[str, Foo] 等）；
                 None 时返回原始的 dict/list/基础类型

        Raises:
            SerializationError: JSON 无效或无法转换为目标类型
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise SerializationError("JSON 解码失败", e) from e

        if cls is None:
            return data
        return _coerce(data, cls)


def _key_to_str(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        key = key.value
    if isinstance(key, bool):
        return 'true' if key else 'false'
    if key is None:
        return 'null'
    return str(key)


def _mismatch(data: Any, cls: Any, error: Optional[BaseException] = None) -> SerializationError:
    name = getattr(cls, '__name__', None) or str(cls)
    return SerializationError(f"无法将 {type(data).__name__} 转换为 {name}", error)


def _coerce(data: Any, cls: Any) -> Any:
    """将 JSON 解码结果转换为目标类型"""
    if cls is Any or cls is object:
        return data

    origin = typing.get_origin(cls)
    args = typing.get_args(cls)

    if origin in _UNION_ORIGINS:
        if data is None and type(None) in args:
            return None
        last_error = None
        for option in args:
            if option is type(None):
                continue
            try:
                return _coerce(data, option)
            except SerializationError as e:
                last_error = e
        raise _mismatch(data, cls, last_error)

    if origin is not None:
        return _coerce_generic(data, origin, args, cls)

    if cls is type(None):
        if data is None:
            return None
        raise _mismatch(data, cls)

    if cls is bool:
        if isinstance(data, bool):
            return data
        raise _mismatch(data, cls)

    if cls is int:
        if isinstance(data, int) and not isinstance(data, bool):
            return data
        if isinstance(data, float) and data.is_integer():
            return int(data)
        raise _mismatch(data, cls)

    if cls is float:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return float(data)
        raise _mismatch(data, cls)

    if cls is str:
        if isinstance(data, str):
            return data
        raise _mismatch(data, cls)

    if cls in (list, tuple, set, frozenset):
        if isinstance(data, list):
            return cls(data)
        raise _mismatch(data, cls)

    if cls is dict:
        if isinstance(data, dict):
            return data
        raise _mismatch(data, cls)

    if isinstance(cls, type) and issubclass(cls, (datetime, date, time)):
        if isinstance(data, str):
            try:
                return cls.fromisoformat(data)
            except ValueError as e:
                raise _mismatch(data, cls, e) from e
        raise _mismatch(data, cls)

    if isinstance(cls, type) and issubclass(cls, Enum):
        try:
            return cls(data)
        except ValueError as e:
            raise _mismatch(data, cls, e) from e

    if isinstance(cls, type) and issubclass(cls, (UUID, PurePath)):
        if isinstance(data, str):
            return cls(data)
        raise _mismatch(data, cls)

    if dataclasses.is_dataclass(cls):
        return _coerce_dataclass(data, cls)

    if isinstance(cls, type):
        if isinstance(data, cls):
            return data
        if isinstance(data, dict):
            try:
                return cls(**data)
            except (TypeError, ValueError) as e:
                raise _mismatch(data, cls, e) from e

    raise _mismatch(data, cls)


def _coerce_generic(data: Any, origin: Any, args: tuple, cls: Any) -> Any:
    if origin in _MAPPING_ORIGINS:
        if not isinstance(data, dict):
            raise _mismatch(data, cls)
        key_type, value_type = args if len(args) == 2 else (Any, Any)
        return {
            _coerce_key(k, key_type): _coerce(v, value_type)
            for k, v in data.items()
        }

    if not isinstance(data, list):
        raise _mismatch(data, cls)

    if origin is tuple:
        if not args:
            return tuple(data)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_coerce(item, args[0]) for item in data)
        if len(args) != len(data):
            raise _mismatch(data, cls)
        return tuple(_coerce(item, item_type) for item, item_type in zip(data, args))

    item_type = args[0] if args else Any
    items = [_coerce(item, item_type) for item in data]

    if origin in _SET_ORIGINS:
        return frozenset(items) if origin is frozenset else set(items)
    if origin in _SEQUENCE_ORIGINS:
        return items

    raise _mismatch(data, cls)


def _coerce_key(key: str, key_type: Any) -> Any:
    if key_type in (Any, str, object):
        return key
    if key_type is int:
        try:
            return int(key)
        except ValueError as e:
            raise _mismatch(key, key_type, e) from e
    if key_type is float:
        try:
            return float(key)
        except ValueError as e:
            raise _mismatch(key, key_type, e) from e
    return _coerce(key, key_type)


def _coerce_dataclass(data: Any, cls: Any) -> Any:
    if not isinstance(data, dict):
        raise _mismatch(data, cls)

    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise _mismatch(data, cls, e) from e

    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init or f.name not in data:
            continue
        kwargs[f.name] = _coerce(data[f.name], hints.get(f.name, Any))

    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise _mismatch(data, cls, e) from e
