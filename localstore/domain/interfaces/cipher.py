"""
加密器接口定义
"""

from typing import Protocol


class ICipher(Protocol):
    """
    加密器接口

    只保证 decrypt(encrypt(x)) == x，算法由实现决定。
    """

    def encrypt(self, key: str, salt: str, plaintext: str) -> str:
        """加密载荷"""
        ...

    def decrypt(self, key: str, salt: str, ciphertext: str) -> str:
        """解密载荷"""
        ...
