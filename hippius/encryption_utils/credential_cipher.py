"""
Password protection of seed phrases stored in the config file.

Encoded value is base64 of ``salt (16) || IV (16) || AES-256-CBC ciphertext``,
key derived from the password with PBKDF2-HMAC-SHA256.
"""

from __future__ import annotations

import base64
import binascii
import logging
import typing as tp
from dataclasses import dataclass

from ..const import IV_SIZE, SALT_SIZE
from ..exceptions import (
    DecryptionFailed,
    EmptyPassword,
    InvalidEnvelopeFormat,
    MissingPassword,
    WrongPasswordOrCorruptData,
)
from .content_cipher import aes_cbc_decrypt, aes_cbc_encrypt
from .key_derivation import derive_key
from .random_source import RandomSource, get_random_source

_LOGGER = logging.getLogger(__name__)


def protect(
    secret: str, password: str, random_source: RandomSource | None = None
) -> str:
    """Encrypt a secret with a password.

    :param secret: Secret string, usually a mnemonic seed phrase
    :param password: Non-empty password
    :param random_source: Source of salt and IV, system CSPRNG by default

    :return: base64 encoded envelope
    """

    if not password:
        raise EmptyPassword
    random_source = get_random_source(random_source)
    salt = random_source.random_bytes(SALT_SIZE)
    key = derive_key(password, salt)
    iv = random_source.random_bytes(IV_SIZE)
    encrypted = aes_cbc_encrypt(secret.encode("utf-8"), key, iv)
    return base64.b64encode(salt + iv + encrypted).decode("ascii")


def _split_envelope(encoded: str) -> tp.Tuple[bytes, bytes, bytes]:
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError, TypeError):
        raise InvalidEnvelopeFormat("not valid base64") from None
    if len(raw) < SALT_SIZE + IV_SIZE:
        raise InvalidEnvelopeFormat(f"expected at least {SALT_SIZE + IV_SIZE} bytes")
    return raw[:SALT_SIZE], raw[SALT_SIZE : SALT_SIZE + IV_SIZE], raw[SALT_SIZE + IV_SIZE :]


def reveal(encoded: str, password: str | None) -> str:
    """Decrypt a secret encrypted with :func:`protect`.

    Wrong password, tampered and truncated envelopes all raise
    :class:`WrongPasswordOrCorruptData`.

    :param encoded: base64 encoded envelope
    :param password: Password used for encryption

    :return: Decrypted secret
    """

    if not password:
        raise MissingPassword
    salt, iv, encrypted = _split_envelope(encoded)
    key = derive_key(password, salt)
    try:
        return aes_cbc_decrypt(encrypted, key, iv).decode("utf-8")
    except (DecryptionFailed, UnicodeDecodeError):
        raise WrongPasswordOrCorruptData from None


@dataclass(frozen=True)
class SecretRecord:
    """Seed phrase as stored in an account record, plain or encoded."""

    seed_phrase: str
    seed_phrase_encoded: bool = False

    @classmethod
    def plaintext(cls, secret: str) -> SecretRecord:
        return cls(seed_phrase=secret, seed_phrase_encoded=False)

    @classmethod
    def encoded(
        cls, secret: str, password: str, random_source: RandomSource | None = None
    ) -> SecretRecord:
        return cls(seed_phrase=protect(secret, password, random_source), seed_phrase_encoded=True)

    @classmethod
    def from_dict(cls, data: tp.Dict[str, tp.Any]) -> SecretRecord:
        return cls(
            seed_phrase=data["seed_phrase"],
            seed_phrase_encoded=bool(data.get("seed_phrase_encoded", False)),
        )

    def to_dict(self) -> tp.Dict[str, tp.Any]:
        return {
            "seed_phrase": self.seed_phrase,
            "seed_phrase_encoded": self.seed_phrase_encoded,
        }

    def reveal(self, password: str | None = None) -> str:
        """Return the secret, decrypting it when the record is encoded."""

        if not self.seed_phrase_encoded:
            return self.seed_phrase
        return reveal(self.seed_phrase, password)

    def __repr__(self) -> str:
        return f"SecretRecord(seed_phrase=<hidden>, seed_phrase_encoded={self.seed_phrase_encoded})"
