"""Constants for the Hippius client."""

from pathlib import Path

VERSION = "0.1.0"

KEY_SIZE = 32
IV_SIZE = 16
SALT_SIZE = 16
AES_BLOCK_SIZE = 16
PBKDF2_ITERATIONS = 100000

MAX_RETRIES = 3

ENV_PREFIX = "HIPPIUS"
ENV_ENCRYPTION_KEY = "HIPPIUS_ENCRYPTION_KEY"

CONFIG_DIR = Path.home() / ".hippius"
CONFIG_FILE = CONFIG_DIR / "config.json"

CONF_IPFS = "ipfs"
CONF_SUBSTRATE = "substrate"
CONF_ENCRYPTION = "encryption"
CONF_CLI = "cli"

DEFAULT_IPFS_GATEWAY = "https://get.hippius.network"
DEFAULT_IPFS_API_URL = "https://store.hippius.network"
LOCAL_IPFS_API_URL = "http://localhost:5001"
DEFAULT_SUBSTRATE_URL = "wss://rpc.hippius.network"

IPFS_REQUEST_TIMEOUT = 60
IPFS_PREVIEW_BYTES = 1024
