"""
This module contains the IPFS client. It uploads and downloads files with optional
encryption, checks whether content exists and pins it.

Uploads, downloads, cat, exists and pin go through run_with_retry(), so transient
failures are retried with exponential backoff before they reach the caller.
is_pinned() is a single lookup: the node answers an unpinned CID with an error
status, which is reported in the result instead of being retried.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
import typing as tp
from dataclasses import dataclass

import aiohttp

from ..config_helpers import ConfigStore
from ..const import (
    CONF_CLI,
    CONF_ENCRYPTION,
    CONF_IPFS,
    DEFAULT_IPFS_API_URL,
    DEFAULT_IPFS_GATEWAY,
    IPFS_PREVIEW_BYTES,
    LOCAL_IPFS_API_URL,
    MAX_RETRIES,
)
from ..encryption_utils import ContentCipher, RandomSource, generate_encryption_key
from ..exceptions import EncryptionUnavailable, IPFSRequestError
from ..retry_helpers import run_with_retry
from ..retry_helpers.retry_util import Sleep
from ..utils import format_cid, format_size, is_printable_text, read_file_data, write_file_data
from .http_api import IPFSHttpApi

_LOGGER = logging.getLogger(__name__)

REQUEST_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, IPFSRequestError)


@dataclass
class UploadResult:
    cid: str
    filename: str
    size_bytes: int
    size_formatted: str
    encrypted: bool


@dataclass
class DownloadResult:
    success: bool
    output_path: str
    size_bytes: int
    size_formatted: str
    elapsed_seconds: float
    decrypted: bool


@dataclass
class CatResult:
    content: bytes
    size_bytes: int
    size_formatted: str
    decrypted: bool
    preview: tp.Optional[bytes] = None
    is_text: tp.Optional[bool] = None
    text_preview: tp.Optional[str] = None
    hex_preview: tp.Optional[str] = None


@dataclass
class ExistsResult:
    exists: bool
    cid: str
    formatted_cid: str
    gateway_url: tp.Optional[str]


@dataclass
class PinResult:
    success: bool
    cid: str
    formatted_cid: str
    message: str


@dataclass
class PinStatus:
    cid: str
    pinned: bool
    formatted_cid: str
    pin_type: tp.Optional[str] = None
    message: tp.Optional[str] = None


@dataclass
class PublishResult:
    published: bool
    cid: str
    formatted_cid: str
    message: str


class IPFSClient:
    def __init__(
        self,
        gateway: tp.Optional[str] = None,
        api_url: tp.Optional[str] = None,
        encrypt_by_default: tp.Optional[bool] = None,
        encryption_key: tp.Optional[bytes] = None,
        config: tp.Optional[ConfigStore] = None,
        api: tp.Optional[IPFSHttpApi] = None,
        random_source: tp.Optional[RandomSource] = None,
        sleep: tp.Optional[Sleep] = None,
    ) -> None:
        self._config: ConfigStore = config if config is not None else ConfigStore()
        if gateway is None:
            gateway = self._config.get_value(CONF_IPFS, "gateway", DEFAULT_IPFS_GATEWAY)
        if api_url is None:
            api_url = self._config.get_value(CONF_IPFS, "api_url", DEFAULT_IPFS_API_URL)
            if self._config.get_value(CONF_IPFS, "local_ipfs", False):
                api_url = LOCAL_IPFS_API_URL
        if encrypt_by_default is None:
            encrypt_by_default = self._config.get_value(CONF_ENCRYPTION, "encrypt_by_default", False)
        if encryption_key is None:
            encryption_key = self._config.get_encryption_key()

        self.gateway: str = gateway.rstrip("/")
        self.api_url: str = api_url.rstrip("/")
        self.encrypt_by_default: bool = bool(encrypt_by_default)
        self.max_retries: int = self._config.get_value(CONF_CLI, "max_retries", MAX_RETRIES)
        self._random_source = random_source
        self._cipher = ContentCipher(encryption_key, random_source)
        self._sleep = sleep
        self._api: IPFSHttpApi = api if api is not None else IPFSHttpApi(self.api_url, self.gateway)

        if self.encrypt_by_default and not self.encryption_available:
            _LOGGER.warning(
                "Encryption requested but not available. Check that a valid encryption key is provided."
            )

    async def __aenter__(self) -> IPFSClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def encryption_available(self) -> bool:
        return self._cipher.encryption_available

    def encrypt_data(self, data: bytes) -> bytes:
        if not self.encryption_available:
            raise EncryptionUnavailable
        return self._cipher.encrypt_data(data)

    def decrypt_data(self, encrypted_data: bytes) -> bytes:
        if not self.encryption_available:
            raise EncryptionUnavailable
        return self._cipher.decrypt_data(encrypted_data)

    def generate_encryption_key(self) -> str:
        return generate_encryption_key(self._random_source)

    async def upload_file(
        self,
        file_path: str,
        encrypt: tp.Optional[bool] = None,
        max_retries: tp.Optional[int] = None,
    ) -> UploadResult:
        """Upload a file to IPFS with optional encryption.

        :param file_path: Path to the file to upload
        :param encrypt: Encrypt the file, overrides encrypt_by_default
        :param max_retries: Maximum number of upload attempts

        :return: Upload details, size is the size of the original file
        """

        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File {file_path} not found")
        data = await read_file_data(file_path)
        return await self.upload_bytes(data, os.path.basename(file_path), encrypt, max_retries)

    async def upload_bytes(
        self,
        data: bytes,
        filename: str = "file",
        encrypt: tp.Optional[bool] = None,
        max_retries: tp.Optional[int] = None,
    ) -> UploadResult:
        should_encrypt = self._should_encrypt(encrypt)
        size_bytes = len(data)
        payload = self.encrypt_data(data) if should_encrypt else data
        cid = await run_with_retry(
            lambda: self._api.add_bytes(payload, filename),
            self._attempts(max_retries),
            sleep=self._sleep,
        )
        _LOGGER.debug(f"Uploaded {filename} with cid {cid}, encrypted: {should_encrypt}")
        return UploadResult(
            cid=cid,
            filename=filename,
            size_bytes=size_bytes,
            size_formatted=format_size(size_bytes),
            encrypted=should_encrypt,
        )

    async def download_file(
        self,
        cid: str,
        output_path: str,
        decrypt: tp.Optional[bool] = None,
        max_retries: tp.Optional[int] = None,
    ) -> DownloadResult:
        """Download a file from IPFS with optional decryption.

        :param cid: CID of the file
        :param output_path: Where to save the file, missing directories are created
        :param decrypt: Decrypt the file, overrides encrypt_by_default
        :param max_retries: Maximum number of download attempts

        :return: Download details
        """

        start_time = time.monotonic()
        should_decrypt = self._should_encrypt(decrypt)
        data = await run_with_retry(
            lambda: self._api.cat(cid), self._attempts(max_retries), sleep=self._sleep
        )
        if should_decrypt:
            data = self.decrypt_data(data)
        await write_file_data(output_path, data)
        return DownloadResult(
            success=True,
            output_path=output_path,
            size_bytes=len(data),
            size_formatted=format_size(len(data)),
            elapsed_seconds=time.monotonic() - start_time,
            decrypted=should_decrypt,
        )

    async def cat(
        self,
        cid: str,
        max_display_bytes: int = IPFS_PREVIEW_BYTES,
        format_output: bool = True,
        decrypt: tp.Optional[bool] = None,
    ) -> CatResult:
        should_decrypt = self._should_encrypt(decrypt)
        content = await run_with_retry(
            lambda: self._api.cat(cid), self.max_retries, sleep=self._sleep
        )
        if should_decrypt:
            content = self.decrypt_data(content)
        result = CatResult(
            content=content,
            size_bytes=len(content),
            size_formatted=format_size(len(content)),
            decrypted=should_decrypt,
        )
        if format_output:
            preview = content[:max_display_bytes]
            result.preview = preview
            if is_printable_text(preview):
                result.is_text = True
                result.text_preview = preview.decode("utf-8")
            else:
                result.is_text = False
                result.hex_preview = preview.hex()
        return result

    async def exists(self, cid: str) -> ExistsResult:
        formatted_cid = format_cid(cid)
        try:
            exists = await run_with_retry(
                lambda: self._api.exists(cid), self.max_retries, sleep=self._sleep
            )
        except REQUEST_ERRORS as e:
            _LOGGER.error(f"Exception in check if {cid} exists: {e!r}")
            exists = False
        return ExistsResult(
            exists=exists,
            cid=cid,
            formatted_cid=formatted_cid,
            gateway_url=self._api.gateway_url(cid) if exists else None,
        )

    async def pin(self, cid: str) -> PinResult:
        formatted_cid = format_cid(cid)
        try:
            await run_with_retry(lambda: self._api.pin_add(cid), self.max_retries, sleep=self._sleep)
        except REQUEST_ERRORS as e:
            _LOGGER.error(f"Exception in pin {cid}: {e!r}")
            return PinResult(False, cid, formatted_cid, f"Failed to pin: {e}")
        _LOGGER.debug(f"Hash {cid} was pinned")
        return PinResult(True, cid, formatted_cid, "Successfully pinned")

    async def is_pinned(self, cid: str) -> PinStatus:
        formatted_cid = format_cid(cid)
        try:
            keys = await self._api.pin_ls(cid)
        except IPFSRequestError as e:
            return PinStatus(cid, False, formatted_cid, message=str(e))
        except REQUEST_ERRORS as e:
            return PinStatus(cid, False, formatted_cid, message=f"Error checking pin status: {e!r}")
        if cid not in keys:
            return PinStatus(cid, False, formatted_cid, message="CID is not pinned")
        pin_type = keys[cid].get("Type")
        return PinStatus(cid, True, formatted_cid, pin_type, f"CID is pinned with type: {pin_type}")

    async def publish_global(self, cid: str) -> PublishResult:
        pin_result = await self.pin(cid)
        if not pin_result.success:
            return PublishResult(
                False, cid, pin_result.formatted_cid, f"Failed to pin content locally: {pin_result.message}"
            )
        return PublishResult(True, cid, pin_result.formatted_cid, "Content published to global IPFS network")

    async def close(self) -> None:
        await self._api.close()

    def _should_encrypt(self, encrypt: tp.Optional[bool]) -> bool:
        should_encrypt = self.encrypt_by_default if encrypt is None else encrypt
        if should_encrypt and not self.encryption_available:
            raise EncryptionUnavailable("encryption requested but no valid key is provided")
        return should_encrypt

    def _attempts(self, max_retries: tp.Optional[int]) -> int:
        return self.max_retries if max_retries is None else max_retries
