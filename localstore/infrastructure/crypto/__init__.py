"""
加密模块

提供载荷的加密与解密。
"""
from .aes_cipher import AesCipher

__all__ = ['AesCipher']
