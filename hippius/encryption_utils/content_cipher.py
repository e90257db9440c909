"""
AES-256-CBC encryption of file contents.

Envelope layout is ``IV (16 bytes) || ciphertext`` with PKCS#7 padding. The
envelope is what gets uploaded to IPFS, so the layout must stay bit-exact.
"""

from __future__ import annotations

import base64
import functools
import logging
import typing as tp

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..const import AES_BLOCK_SIZE, IV_SIZE, KEY_SIZE
from ..exceptions import DecryptionFailed, EncryptionUnavailable, InvalidKeyLength
from .random_source import RandomSource, get_random_source

_LOGGER = logging.getLogger(__name__)

BytesLike = tp.Union[bytes, bytearray, memoryview]


@functools.lru_cache(maxsize=None)
def is_encryption_supported() -> bool:
    """Check once whether the crypto backend provides AES-256-CBC."""

    try:
        return default_backend().cipher_supported(
            algorithms.AES(bytes(KEY_SIZE)), modes.CBC(bytes(IV_SIZE))
        )
    except UnsupportedAlgorithm as e:
        _LOGGER.warning(f"AES-CBC is not supported by the crypto backend: {e}")
        return False


def _check_key(key: BytesLike) -> None:
    if key is None:
        raise EncryptionUnavailable("no encryption key")
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"got {len(key)} bytes")


def aes_cbc_encrypt(plaintext: BytesLike, key: BytesLike, iv: BytesLike) -> bytes:
    """Encrypt with AES-256-CBC and PKCS#7 padding, without any envelope."""

    _check_key(key)
    if len(iv) != IV_SIZE:
        raise ValueError(f"IV must be exactly {IV_SIZE} bytes")
    if not is_encryption_supported():
        raise EncryptionUnavailable("AES-CBC is not supported")
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(bytes(plaintext)) + padder.finalize()
    encryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv))).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def aes_cbc_decrypt(ciphertext: BytesLike, key: BytesLike, iv: BytesLike) -> bytes:
    """Reverse :func:`aes_cbc_encrypt`.

    Wrong key, bad length and bad padding all raise the same
    :class:`DecryptionFailed` with no detail about the cause.
    """

    _check_key(key)
    if not is_encryption_supported():
        raise EncryptionUnavailable("AES-CBC is not supported")
    if len(iv) != IV_SIZE or not ciphertext or len(ciphertext) % AES_BLOCK_SIZE:
        raise DecryptionFailed
    try:
        decryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv))).decryptor()
        padded = decryptor.update(bytes(ciphertext)) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError:
        raise DecryptionFailed from None


def encrypt(
    plaintext: BytesLike, key: BytesLike, random_source: RandomSource | None = None
) -> bytes:
    """Encrypt data under a fresh random IV.

    :param plaintext: Data to encrypt
    :param key: 32-byte symmetric key
    :param random_source: Source of the IV, system CSPRNG by default

    :return: IV concatenated with the ciphertext
    """

    if not isinstance(plaintext, (bytes, bytearray, memoryview)):
        raise TypeError("Data must be bytes")
    _check_key(key)
    iv = get_random_source(random_source).random_bytes(IV_SIZE)
    return iv + aes_cbc_encrypt(plaintext, key, iv)


def decrypt(envelope: BytesLike, key: BytesLike) -> bytes:
    """Decrypt an envelope produced by :func:`encrypt`.

    :param envelope: IV concatenated with the ciphertext
    :param key: 32-byte symmetric key

    :return: Decrypted data
    """

    _check_key(key)
    envelope = bytes(envelope)
    if len(envelope) < IV_SIZE + AES_BLOCK_SIZE:
        raise DecryptionFailed
    return aes_cbc_decrypt(envelope[IV_SIZE:], key, envelope[:IV_SIZE])


def generate_encryption_key(random_source: RandomSource | None = None) -> str:
    """Generate a new random 32-byte key, base64 encoded for storage."""

    key = get_random_source(random_source).random_bytes(KEY_SIZE)
    return base64.b64encode(key).decode("ascii")


class ContentCipher:
    """Encrypts file data with a configured key.

    Refuses to work without a key instead of passing data through in
    plaintext, and exposes ``encryption_available`` so callers can check
    before uploading.
    """

    def __init__(
        self, key: bytes | None = None, random_source: RandomSource | None = None
    ) -> None:
        self._key: bytes | None = key
        self._random_source: RandomSource = get_random_source(random_source)

    @property
    def encryption_available(self) -> bool:
        return (
            self._key is not None
            and len(self._key) == KEY_SIZE
            and is_encryption_supported()
        )

    def encrypt_data(self, data: BytesLike) -> bytes:
        if self._key is None:
            raise EncryptionUnavailable("no encryption key")
        return encrypt(data, self._key, self._random_source)

    def decrypt_data(self, encrypted_data: BytesLike) -> bytes:
        if self._key is None:
            raise EncryptionUnavailable("no encryption key")
        return decrypt(encrypted_data, self._key)
