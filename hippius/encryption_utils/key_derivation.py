from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..const import KEY_SIZE, PBKDF2_ITERATIONS, SALT_SIZE
from ..exceptions import InvalidSalt


def derive_key(password: str, salt: bytes) -> bytes:
    """Derive a 256-bit key from a password with PBKDF2-HMAC-SHA256.

    Iteration count and hash are part of the stored envelope format: changing
    them makes previously encoded seed phrases unreadable.

    :param password: Password to derive the key from
    :param salt: 16 random bytes stored next to the ciphertext

    :return: 32-byte derived key
    """

    if len(salt) != SALT_SIZE:
        raise InvalidSalt(f"got {len(salt)} bytes")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=bytes(salt),
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(password.encode("utf-8"))
