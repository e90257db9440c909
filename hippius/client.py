"""
Entry point of the SDK. HippiusClient wires the IPFS client to the config file
and exposes file storage and account helpers in one place.
"""

from __future__ import annotations

import logging
import typing as tp

from .config_helpers import ConfigStore
from .const import IPFS_PREVIEW_BYTES
from .encryption_utils import RandomSource
from .ipfs_helpers import (
    CatResult,
    DownloadResult,
    ExistsResult,
    IPFSClient,
    IPFSHttpApi,
    PinResult,
    PinStatus,
    PublishResult,
    UploadResult,
)
from .retry_helpers.retry_util import Sleep
from .utils import format_cid, format_size

_LOGGER = logging.getLogger(__name__)


class HippiusClient:
    def __init__(
        self,
        ipfs_gateway: tp.Optional[str] = None,
        ipfs_api_url: tp.Optional[str] = None,
        encrypt_by_default: tp.Optional[bool] = None,
        encryption_key: tp.Optional[bytes] = None,
        config: tp.Optional[ConfigStore] = None,
        api: tp.Optional[IPFSHttpApi] = None,
        random_source: tp.Optional[RandomSource] = None,
        sleep: tp.Optional[Sleep] = None,
    ) -> None:
        """Create the client. Arguments left as None are taken from the config file.

        :param ipfs_gateway: Gateway used for downloads
        :param ipfs_api_url: IPFS HTTP API used for uploads and pins
        :param encrypt_by_default: Encrypt uploads and decrypt downloads unless told otherwise
        :param encryption_key: 32-byte content key
        :param config: Config store, ``~/.hippius/config.json`` by default
        """

        self.config: ConfigStore = config if config is not None else ConfigStore()
        self.ipfs_client: IPFSClient = IPFSClient(
            gateway=ipfs_gateway,
            api_url=ipfs_api_url,
            encrypt_by_default=encrypt_by_default,
            encryption_key=encryption_key,
            config=self.config,
            api=api,
            random_source=random_source,
            sleep=sleep,
        )
        _LOGGER.debug(
            f"Hippius client created, api: {self.ipfs_client.api_url}, gateway: {self.ipfs_client.gateway}"
        )

    async def __aenter__(self) -> HippiusClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def encryption_available(self) -> bool:
        return self.ipfs_client.encryption_available

    async def upload_file(
        self, file_path: str, encrypt: tp.Optional[bool] = None, max_retries: tp.Optional[int] = None
    ) -> UploadResult:
        return await self.ipfs_client.upload_file(file_path, encrypt=encrypt, max_retries=max_retries)

    async def download_file(
        self,
        cid: str,
        output_path: str,
        decrypt: tp.Optional[bool] = None,
        max_retries: tp.Optional[int] = None,
    ) -> DownloadResult:
        return await self.ipfs_client.download_file(
            cid, output_path, decrypt=decrypt, max_retries=max_retries
        )

    async def cat(
        self,
        cid: str,
        max_display_bytes: int = IPFS_PREVIEW_BYTES,
        format_output: bool = True,
        decrypt: tp.Optional[bool] = None,
    ) -> CatResult:
        return await self.ipfs_client.cat(cid, max_display_bytes, format_output, decrypt)

    async def exists(self, cid: str) -> ExistsResult:
        return await self.ipfs_client.exists(cid)

    async def pin(self, cid: str) -> PinResult:
        return await self.ipfs_client.pin(cid)

    async def is_pinned(self, cid: str) -> PinStatus:
        return await self.ipfs_client.is_pinned(cid)

    async def publish_global(self, cid: str) -> PublishResult:
        return await self.ipfs_client.publish_global(cid)

    def set_seed_phrase(
        self,
        seed_phrase: str,
        encode: bool = False,
        password: tp.Optional[str] = None,
        account_name: tp.Optional[str] = None,
    ) -> None:
        self.config.set_seed_phrase(seed_phrase, encode, password, account_name)

    def get_seed_phrase(
        self, account_name: tp.Optional[str] = None, password: tp.Optional[str] = None
    ) -> str:
        return self.config.get_seed_phrase(account_name, password)

    def generate_encryption_key(self) -> str:
        return self.ipfs_client.generate_encryption_key()

    @staticmethod
    def format_cid(cid: str) -> str:
        return format_cid(cid)

    @staticmethod
    def format_size(size_bytes: int) -> str:
        return format_size(size_bytes)

    async def close(self) -> None:
        await self.ipfs_client.close()
