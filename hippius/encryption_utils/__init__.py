from .content_cipher import (
    ContentCipher,
    decrypt,
    encrypt,
    generate_encryption_key,
    is_encryption_supported,
)
from .credential_cipher import SecretRecord, protect, reveal
from .key_derivation import derive_key
from .random_source import RandomSource, SystemRandomSource

__all__ = [
    "ContentCipher",
    "RandomSource",
    "SecretRecord",
    "SystemRandomSource",
    "decrypt",
    "derive_key",
    "encrypt",
    "generate_encryption_key",
    "is_encryption_supported",
    "protect",
    "reveal",
]
