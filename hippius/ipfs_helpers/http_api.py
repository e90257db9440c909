from __future__ import annotations

import logging
import typing as tp

import aiohttp

from ..const import IPFS_REQUEST_TIMEOUT
from ..exceptions import IPFSRequestError
from .decorators import log_request, set_timeout

_LOGGER = logging.getLogger(__name__)


class IPFSHttpApi:
    """Thin wrapper over the IPFS HTTP RPC API and a read gateway.

    Writes (add, pin) go to ``api_url``, reads go to ``gateway``. Request
    bodies are opaque bytes.
    """

    def __init__(
        self,
        api_url: str,
        gateway: str,
        session: tp.Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.api_url: str = api_url.rstrip("/")
        self.gateway: str = gateway.rstrip("/")
        self._session: tp.Optional[aiohttp.ClientSession] = session
        self._owns_session: bool = session is None

    def gateway_url(self, cid: str) -> str:
        return f"{self.gateway}/ipfs/{cid}"

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    @log_request("add bytes")
    @set_timeout(IPFS_REQUEST_TIMEOUT)
    async def add_bytes(self, data: bytes, filename: str = "file") -> str:
        form = aiohttp.FormData()
        form.add_field("file", data, filename=filename, content_type="application/octet-stream")
        session = self._get_session()
        async with session.post(f"{self.api_url}/api/v0/add", data=form) as resp:
            self._check_response(resp, "add")
            result = await resp.json(content_type=None)
        ipfs_hash = result.get("Hash") or result.get("cid")
        if not ipfs_hash:
            raise IPFSRequestError("no CID in add response")
        _LOGGER.debug(f"{filename} ({len(data)} bytes) was added with cid: {ipfs_hash}")
        return ipfs_hash

    @log_request("cat")
    @set_timeout(IPFS_REQUEST_TIMEOUT)
    async def cat(self, cid: str) -> bytes:
        session = self._get_session()
        async with session.get(self.gateway_url(cid)) as resp:
            self._check_response(resp, "cat")
            return await resp.read()

    @log_request("exists")
    @set_timeout(IPFS_REQUEST_TIMEOUT)
    async def exists(self, cid: str) -> bool:
        session = self._get_session()
        async with session.head(self.gateway_url(cid)) as resp:
            _LOGGER.debug(f"HEAD {cid} responded with {resp.status}")
            return resp.ok

    @log_request("pin add")
    @set_timeout(IPFS_REQUEST_TIMEOUT)
    async def pin_add(self, cid: str) -> tp.List[str]:
        session = self._get_session()
        async with session.post(f"{self.api_url}/api/v0/pin/add", params={"arg": cid}) as resp:
            self._check_response(resp, "pin add")
            result = await resp.json(content_type=None)
        return result.get("Pins") or [cid]

    @log_request("pin ls")
    @set_timeout(IPFS_REQUEST_TIMEOUT)
    async def pin_ls(self, cid: str) -> tp.Dict[str, tp.Dict[str, str]]:
        session = self._get_session()
        async with session.post(f"{self.api_url}/api/v0/pin/ls", params={"arg": cid}) as resp:
            self._check_response(resp, "pin ls")
            result = await resp.json(content_type=None)
        return result.get("Keys") or {}

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    @staticmethod
    def _check_response(resp: aiohttp.ClientResponse, action: str) -> None:
        if resp.status != 200:
            _LOGGER.error(f"IPFS {action} request failed with response {resp.status}")
            raise IPFSRequestError(f"{action} returned {resp.status} {resp.reason}", status=resp.status)
