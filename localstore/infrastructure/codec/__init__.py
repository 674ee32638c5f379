"""
编解码模块

提供值与字符串载荷之间的转换。
"""
from .json_codec import JsonCodec

__all__ = ['JsonCodec']
