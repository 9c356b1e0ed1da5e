"""
Deterministic digests for duplicate detection over encrypted columns.

Ciphertext of an encrypted column differs on every write, so equality and
uniqueness checks compare the SHA-256 digest stored in the column's
``hash_col`` sibling instead. This is a lookup key, not password hashing.
"""

import hashlib
from typing import Any


def digest(plaintext: Any) -> str:
    """
    Return the lowercase hex SHA-256 digest of *plaintext*.

    Examples:
        >>> digest("abc")
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    return hashlib.sha256(str(plaintext).encode("utf-8")).hexdigest()
