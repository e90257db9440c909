"""Custom exceptions for the Hippius client."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_SALT = "invalid_salt"
    EMPTY_PASSWORD = "empty_password"
    MISSING_PASSWORD = "missing_password"
    ENCRYPTION_UNAVAILABLE = "encryption_unavailable"
    DECRYPTION_FAILED = "decryption_failed"
    WRONG_PASSWORD_OR_CORRUPT_DATA = "wrong_password_or_corrupt_data"
    INVALID_ENVELOPE_FORMAT = "invalid_envelope_format"
    INVALID_CONFIG_FORMAT = "invalid_config_format"
    NO_ACTIVE_ACCOUNT = "no_active_account"
    ACCOUNT_NOT_FOUND = "account_not_found"
    SEED_PHRASE_NOT_FOUND = "seed_phrase_not_found"
    IPFS_REQUEST_FAILED = "ipfs_request_failed"


class HippiusError(Exception):
    """Base class for all errors raised by the client.

    Every error carries a ``kind`` from the closed :class:`ErrorKind` set, so
    callers can branch on it instead of parsing messages, and an optional
    ``diagnostic`` string that is safe to show.
    """

    kind: ErrorKind
    message: str = "Hippius error"

    def __init__(self, diagnostic: str | None = None) -> None:
        self.diagnostic = diagnostic
        text = self.message if diagnostic is None else f"{self.message}: {diagnostic}"
        super().__init__(text)


class InvalidKeyLength(HippiusError):
    """Symmetric key is not exactly 32 bytes"""

    kind = ErrorKind.INVALID_KEY_LENGTH
    message = "Encryption key must be exactly 32 bytes"


class InvalidSalt(HippiusError):
    """Salt for key derivation is not exactly 16 bytes"""

    kind = ErrorKind.INVALID_SALT
    message = "Salt must be exactly 16 bytes"


class EmptyPassword(HippiusError):
    """Password for encrypting a secret is empty"""

    kind = ErrorKind.EMPTY_PASSWORD
    message = "Password required for encrypting seed phrase"


class MissingPassword(HippiusError):
    """Password for decrypting an encoded secret was not given"""

    kind = ErrorKind.MISSING_PASSWORD
    message = "Password required for decrypting seed phrase"


class EncryptionUnavailable(HippiusError):
    """No valid key or no AES-CBC support in the runtime"""

    kind = ErrorKind.ENCRYPTION_UNAVAILABLE
    message = "Encryption is not available. Check that a valid encryption key is provided"


class DecryptionFailed(HippiusError):
    """Content envelope could not be decrypted"""

    kind = ErrorKind.DECRYPTION_FAILED
    message = "Decryption failed. Incorrect key or corrupted data"


class WrongPasswordOrCorruptData(HippiusError):
    """Credential envelope could not be decrypted"""

    kind = ErrorKind.WRONG_PASSWORD_OR_CORRUPT_DATA
    message = "Failed to decrypt seed phrase: invalid password or corrupted data"


class InvalidEnvelopeFormat(WrongPasswordOrCorruptData):
    """Credential envelope is not base64 or is shorter than salt and IV"""

    kind = ErrorKind.INVALID_ENVELOPE_FORMAT
    message = "Invalid encrypted seed phrase format"


class InvalidConfigFormat(HippiusError):
    """Invalid config file structure"""

    kind = ErrorKind.INVALID_CONFIG_FORMAT
    message = "Invalid config file"


class NoActiveAccount(HippiusError):
    """No account given and no active account configured"""

    kind = ErrorKind.NO_ACTIVE_ACCOUNT
    message = "No account specified and no active account"


class AccountNotFound(HippiusError):
    """Account is missing from the config file"""

    kind = ErrorKind.ACCOUNT_NOT_FOUND
    message = "Account not found"


class SeedPhraseNotFound(HippiusError):
    """Account has no seed phrase stored"""

    kind = ErrorKind.SEED_PHRASE_NOT_FOUND
    message = "No seed phrase found for account"


class IPFSRequestError(HippiusError):
    """IPFS node or gateway answered with an error status"""

    kind = ErrorKind.IPFS_REQUEST_FAILED
    message = "IPFS request failed"

    def __init__(self, diagnostic: str | None = None, status: int | None = None) -> None:
        self.status = status
        super().__init__(diagnostic)
