"""
AES 加密器 - 基础设施层

使用 AES-256-CBC 加密字符串载荷，密钥由 PBKDF2-HMAC-SHA256 从
用户密钥与盐值派生。

输出格式: base64([16 字节 IV][密文])

依赖:
    pip install cryptography
"""

import base64
import binascii
import os
from functools import lru_cache

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from localstore.domain.exceptions import CipherError
from localstore.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ITERATIONS = 100_000
IV_SIZE = 16
KEY_SIZE = 32


@lru_cache(maxsize=32)
def _derive_key(password: str, salt: str, iterations: int) -> bytes:
    """派生 AES 密钥（相同参数只计算一次）"""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt.encode('utf-8'),
        iterations=iterations,
    )
    logger.debug("派生加密密钥 (iterations=%d)", iterations)
    return kdf.derive(password.encode('utf-8'))


class AesCipher:
    """
    AES 加密器

    同一明文每次加密结果不同（随机 IV），只保证 decrypt(encrypt(x)) == x。
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        self.iterations = iterations

    def encrypt(self, key: str, salt: str, plaintext: str) -> str:
        """
        加密载荷

        Args:
            key: 用户提供的加密密钥
            salt: 盐值
            plaintext: 明文载荷

        Returns:
            base64 编码的 IV + 密文
        """
        aes_key = _derive_key(key, salt, self.iterations)
        iv = os.urandom(IV_SIZE)

        padder = padding.PKCS7(128).padder()
        padded = padder.update(plaintext.encode('utf-8')) + padder.finalize()

        encryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return base64.b64encode(iv + ciphertext).decode('ascii')

    def decrypt(self, key: str, salt: str, ciphertext: str) -> str:
        """
        解密载荷

        Raises:
            CipherError: 载荷格式无效，或密钥/盐值不匹配
        """
        try:
            raw = base64.b64decode(ciphertext.encode('ascii'), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise CipherError("密文不是有效的 base64", e) from e

        if len(raw) <= IV_SIZE:
            raise CipherError("密文长度不足")

        aes_key = _derive_key(key, salt, self.iterations)
        iv, body = raw[:IV_SIZE], raw[IV_SIZE:]

        try:
            decryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(body) + decryptor.finalize()

            unpadder = padding.PKCS7(128).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return plaintext.decode('utf-8')
        except (ValueError, UnicodeDecodeError) as e:
            # 填充无效通常意味着密钥错误
            raise CipherError("解密失败，请检查加密密钥与盐值", e) from e
