"""
Field-level encryption for NoteVault.

Provides AES-256-CBC encryption of individual column values. Every call to
:meth:`FieldCipher.encrypt` draws a fresh random IV, so two encryptions of
the same plaintext never produce the same wire value.

Wire format::

    <iv_hex>:<ciphertext_hex>
"""

from __future__ import annotations

import os
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from note_vault.exceptions import EncryptionError

DELIMITER = ":"
DEFAULT_KEY_LENGTH = 32
DEFAULT_IV_LENGTH = 16


def derive_key(secret: str, key_length: int = DEFAULT_KEY_LENGTH) -> bytes:
    """
    Derive a fixed-length key from the shared secret.

    The UTF-8 bytes of *secret* are truncated or zero-padded to *key_length*.
    """
    raw = secret.encode("utf-8")[:key_length]
    return raw.ljust(key_length, b"\x00")


class FieldCipher:
    """
    Encrypts and decrypts single field values with AES-CBC.

    Example:
        >>> cipher = FieldCipher("k" * 32)
        >>> token = cipher.encrypt("Work")
        >>> cipher.decrypt(token)
        'Work'
    """

    def __init__(
        self,
        secret: str,
        key_length: int = DEFAULT_KEY_LENGTH,
        iv_length: int = DEFAULT_IV_LENGTH,
    ):
        if iv_length != algorithms.AES.block_size // 8:
            raise ValueError("AES-CBC requires a 16 byte IV")
        self._key = derive_key(secret, key_length)
        self.iv_length = iv_length

    def __repr__(self) -> str:
        return f"FieldCipher(key_length={len(self._key)}, iv_length={self.iv_length})"

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(iv))

    def encrypt(self, plaintext: Any) -> str:
        """Encrypt *plaintext* and return ``iv_hex:ciphertext_hex``."""
        data = str(plaintext).encode("utf-8")
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(data) + padder.finalize()

        iv = os.urandom(self.iv_length)
        encryptor = self._cipher(iv).encryptor()
        ct = encryptor.update(padded) + encryptor.finalize()
        return f"{iv.hex()}{DELIMITER}{ct.hex()}"

    def decrypt(self, wire_value: str) -> str:
        """
        Decrypt a value produced by :meth:`encrypt`.

        Raises:
            EncryptionError: If the value is malformed or cannot be decrypted
        """
        if not isinstance(wire_value, str):
            raise EncryptionError("invalid encrypted data")
        iv_hex, sep, ct_hex = wire_value.partition(DELIMITER)
        if not sep or not iv_hex or not ct_hex or DELIMITER in ct_hex:
            raise EncryptionError("invalid encrypted data")

        try:
            iv = bytes.fromhex(iv_hex)
            ct = bytes.fromhex(ct_hex)
        except ValueError:
            raise EncryptionError("invalid encrypted data: not hex encoded") from None
        if len(iv) != self.iv_length:
            raise EncryptionError("invalid encrypted data: bad IV length")
        if len(ct) % (algorithms.AES.block_size // 8):
            raise EncryptionError("invalid encrypted data: truncated ciphertext")

        decryptor = self._cipher(iv).decryptor()
        padded = decryptor.update(ct) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except ValueError:
            # Wrong key or tampered ciphertext
            raise EncryptionError("decryption failed") from None


__all__ = ["FieldCipher", "derive_key", "DELIMITER"]
