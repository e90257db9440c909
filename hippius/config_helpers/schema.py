"""Schema of ~/.hippius/config.json, one model per section."""

from __future__ import annotations

import typing as tp

from pydantic import BaseModel, ConfigDict, Field

from ..const import (
    DEFAULT_IPFS_API_URL,
    DEFAULT_IPFS_GATEWAY,
    DEFAULT_SUBSTRATE_URL,
    MAX_RETRIES,
)


class Section(BaseModel):
    model_config = ConfigDict(extra="allow")


class IPFSSection(Section):
    gateway: str = DEFAULT_IPFS_GATEWAY
    api_url: str = DEFAULT_IPFS_API_URL
    local_ipfs: bool = False


class AccountRecord(Section):
    """Per-account record. ``seed_phrase`` holds either the plain phrase or an
    encoded envelope, depending on ``seed_phrase_encoded``."""

    seed_phrase: tp.Optional[str] = None
    seed_phrase_encoded: bool = False
    ss58_address: tp.Optional[str] = None


class SubstrateSection(Section):
    url: str = DEFAULT_SUBSTRATE_URL
    seed_phrase: tp.Optional[str] = None
    default_miners: tp.List[str] = Field(default_factory=list)
    default_address: tp.Optional[str] = None
    active_account: tp.Optional[str] = None
    accounts: tp.Dict[str, AccountRecord] = Field(default_factory=dict)


class EncryptionSection(Section):
    encrypt_by_default: bool = False
    encryption_key: tp.Optional[str] = None


class CLISection(Section):
    verbose: bool = False
    max_retries: int = Field(default=MAX_RETRIES, ge=1)


class HippiusConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    ipfs: IPFSSection = Field(default_factory=IPFSSection)
    substrate: SubstrateSection = Field(default_factory=SubstrateSection)
    encryption: EncryptionSection = Field(default_factory=EncryptionSection)
    cli: CLISection = Field(default_factory=CLISection)


SECTION_MODELS: tp.Dict[str, tp.Type[Section]] = {
    "ipfs": IPFSSection,
    "substrate": SubstrateSection,
    "encryption": EncryptionSection,
    "cli": CLISection,
}
