"""Field encryption and hashing codecs."""

from .cipher import FieldCipher, derive_key
from .hashing import digest

__all__ = [
    "FieldCipher",
    "derive_key",
    "digest",
]
