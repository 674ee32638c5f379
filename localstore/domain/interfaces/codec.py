"""
编解码器接口定义
"""

from typing import Protocol, Any, Optional


class ICodec(Protocol):
    """
    编解码器接口

    职责:
    - 将任意值序列化为字符串载荷
    - 将载荷反序列化为指定类型（未指定时返回原始结构）
    """

    def serialize(self, value: Any, preserve_cycles: bool = False) -> str:
        """
        序列化值

        Args:
            value: 任意对象或集合
            preserve_cycles: True 时丢弃循环引用，False 时遇到循环引用报错
        """
        ...

    def deserialize(self, payload: str, cls: Optional[Any] = None) -> Any:
        """反序列化载荷；cls 为 None 时不做类型转换"""
        ...
