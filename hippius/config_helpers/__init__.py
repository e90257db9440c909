from .config_store import ConfigStore
from .schema import (
    AccountRecord,
    CLISection,
    EncryptionSection,
    HippiusConfig,
    IPFSSection,
    SubstrateSection,
)

__all__ = [
    "AccountRecord",
    "CLISection",
    "ConfigStore",
    "EncryptionSection",
    "HippiusConfig",
    "IPFSSection",
    "SubstrateSection",
]
