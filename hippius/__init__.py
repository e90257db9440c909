"""
Hippius SDK: encrypted file storage on IPFS with password-protected account secrets.
"""

from .client import HippiusClient
from .config_helpers import ConfigStore
from .const import VERSION
from .encryption_utils import ContentCipher, SecretRecord, decrypt, derive_key, encrypt, protect, reveal
from .exceptions import ErrorKind, HippiusError
from .ipfs_helpers import IPFSClient
from .retry_helpers import RetryPolicy, run_with_retry
from .utils import format_cid, format_size, hex_to_ipfs_cid

__version__ = VERSION

__all__ = [
    "ConfigStore",
    "ContentCipher",
    "ErrorKind",
    "HippiusClient",
    "HippiusError",
    "IPFSClient",
    "RetryPolicy",
    "SecretRecord",
    "decrypt",
    "derive_key",
    "encrypt",
    "format_cid",
    "format_size",
    "hex_to_ipfs_cid",
    "protect",
    "reveal",
    "run_with_retry",
]
