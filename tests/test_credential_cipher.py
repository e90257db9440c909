"""Tests for password protection of seed phrases."""

from __future__ import annotations

import base64
from unittest.mock import patch

import pytest

from hippius.encryption_utils import SecretRecord, derive_key, protect, reveal
from hippius.encryption_utils.content_cipher import aes_cbc_encrypt
from hippius.exceptions import (
    EmptyPassword,
    ErrorKind,
    InvalidEnvelopeFormat,
    MissingPassword,
    WrongPasswordOrCorruptData,
)

SEED = "abandon ability able about above absent absorb abstract absurd abuse access accident"


class TestProtect:
    """protect() returns base64 of salt || IV || ciphertext."""

    def test_envelope_layout(self, random_source):
        encoded = protect(SEED, "hunter2", random_source)
        raw = base64.b64decode(encoded)
        salt, iv, ciphertext = raw[:16], raw[16:32], raw[32:]
        assert salt == b"\x01" * 16
        assert iv == b"\x02" * 16
        assert ciphertext == aes_cbc_encrypt(SEED.encode(), derive_key("hunter2", salt), iv)

    def test_salt_drawn_before_iv(self, random_source):
        protect("secret", "pw", random_source)
        assert random_source.calls == [16, 16]

    def test_output_is_ascii(self):
        assert protect(SEED, "pw").isascii()

    def test_fresh_salt_per_call(self):
        assert protect(SEED, "pw") != protect(SEED, "pw")

    @pytest.mark.parametrize("password", ["", None])
    def test_empty_password(self, password):
        with pytest.raises(EmptyPassword) as exc_info:
            protect(SEED, password)
        assert exc_info.value.kind is ErrorKind.EMPTY_PASSWORD


class TestReveal:
    """reveal() decrypts and maps every failure to one error kind."""

    @pytest.mark.parametrize("secret", [SEED, "", "ключ 🔑 mnemonic"])
    def test_round_trip(self, secret):
        assert reveal(protect(secret, "pw"), "pw") == secret

    def test_known_envelope(self):
        """Envelopes built by hand with the same layout decrypt."""
        salt, iv = b"\x10" * 16, b"\x20" * 16
        ciphertext = aes_cbc_encrypt(b"legacy seed", derive_key("pw", salt), iv)
        encoded = base64.b64encode(salt + iv + ciphertext).decode()
        assert reveal(encoded, "pw") == "legacy seed"

    @pytest.mark.parametrize("password", ["", None])
    def test_missing_password(self, password):
        with pytest.raises(MissingPassword) as exc_info:
            reveal(protect(SEED, "pw"), password)
        assert exc_info.value.kind is ErrorKind.MISSING_PASSWORD

    def test_wrong_password(self):
        with pytest.raises(WrongPasswordOrCorruptData) as exc_info:
            reveal(protect(SEED, "right"), "wrong")
        assert exc_info.value.kind is ErrorKind.WRONG_PASSWORD_OR_CORRUPT_DATA

    def test_truncated_ciphertext(self):
        raw = base64.b64decode(protect(SEED, "pw"))
        with pytest.raises(WrongPasswordOrCorruptData):
            reveal(base64.b64encode(raw[:-3]).decode(), "pw")

    def test_header_only(self):
        """Salt and IV with no ciphertext is corrupt data."""
        encoded = base64.b64encode(b"\x00" * 32).decode()
        with pytest.raises(WrongPasswordOrCorruptData):
            reveal(encoded, "pw")

    @pytest.mark.parametrize("encoded", ["not base64!!", "YWJj", ""])
    def test_invalid_format(self, encoded):
        """Bad base64 and short payloads are format errors, still catchable as corrupt data."""
        with pytest.raises(InvalidEnvelopeFormat) as exc_info:
            reveal(encoded, "pw")
        assert isinstance(exc_info.value, WrongPasswordOrCorruptData)
        assert exc_info.value.kind is ErrorKind.INVALID_ENVELOPE_FORMAT

    def test_short_payload_rejected_before_key_derivation(self):
        encoded = base64.b64encode(b"\x00" * 31).decode()
        with patch("hippius.encryption_utils.credential_cipher.derive_key") as derive:
            with pytest.raises(InvalidEnvelopeFormat):
                reveal(encoded, "pw")
        derive.assert_not_called()


class TestSecretRecord:
    """SecretRecord holds a stored seed phrase, plain or encoded."""

    def test_plaintext_reveals_as_stored(self):
        record = SecretRecord.plaintext(SEED)
        assert record.seed_phrase_encoded is False
        assert record.reveal() == SEED

    def test_encoded_requires_password(self, random_source):
        record = SecretRecord.encoded(SEED, "pw", random_source)
        assert record.seed_phrase_encoded is True
        assert record.seed_phrase != SEED
        with pytest.raises(MissingPassword):
            record.reveal()
        assert record.reveal("pw") == SEED

    def test_dict_round_trip(self):
        record = SecretRecord.encoded(SEED, "pw")
        assert SecretRecord.from_dict(record.to_dict()) == record

    def test_from_dict_defaults_to_plaintext(self):
        assert SecretRecord.from_dict({"seed_phrase": SEED}).seed_phrase_encoded is False

    def test_repr_hides_seed_phrase(self):
        assert SEED not in repr(SecretRecord.plaintext(SEED))
