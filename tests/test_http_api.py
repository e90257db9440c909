"""Tests for the IPFS HTTP API wrapper against a local aiohttp server."""

from __future__ import annotations

import pytest
from aiohttp import test_utils, web

from hippius.exceptions import ErrorKind, IPFSRequestError
from hippius.ipfs_helpers import IPFSHttpApi

CID = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"


def _make_app(stored: dict) -> web.Application:
    async def add(request: web.Request) -> web.Response:
        reader = await request.multipart()
        part = await reader.next()
        stored["filename"] = part.filename
        stored["data"] = bytes(await part.read())
        return web.json_response({"Name": part.filename, "Hash": CID, "Size": str(len(stored["data"]))})

    async def pin_add(request: web.Request) -> web.Response:
        return web.json_response({"Pins": [request.query["arg"]]})

    async def pin_ls(request: web.Request) -> web.Response:
        cid = request.query["arg"]
        if cid != CID:
            return web.json_response({"Message": f"path '{cid}' is not pinned"}, status=500)
        return web.json_response({"Keys": {cid: {"Type": "recursive"}}})

    async def gateway(request: web.Request) -> web.Response:
        if request.match_info["cid"] != CID:
            return web.Response(status=404)
        return web.Response(body=stored.get("data", b""))

    app = web.Application()
    app.router.add_post("/api/v0/add", add)
    app.router.add_post("/api/v0/pin/add", pin_add)
    app.router.add_post("/api/v0/pin/ls", pin_ls)
    app.router.add_get("/ipfs/{cid}", gateway)
    return app


class TestIPFSHttpApi:
    """Requests hit the expected endpoints and errors carry the status."""

    @pytest.mark.asyncio
    async def test_add_then_cat(self):
        stored: dict = {}
        async with test_utils.TestServer(_make_app(stored)) as server:
            base = str(server.make_url("/"))
            api = IPFSHttpApi(base, base)
            try:
                assert await api.add_bytes(b"\x00\x01payload", "blob.bin") == CID
                assert stored == {"filename": "blob.bin", "data": b"\x00\x01payload"}
                assert await api.cat(CID) == b"\x00\x01payload"
            finally:
                await api.close()

    @pytest.mark.asyncio
    async def test_exists(self):
        async with test_utils.TestServer(_make_app({"data": b"x"})) as server:
            base = str(server.make_url("/"))
            api = IPFSHttpApi(base, base)
            try:
                assert await api.exists(CID) is True
                assert await api.exists("QmMissing") is False
            finally:
                await api.close()

    @pytest.mark.asyncio
    async def test_cat_missing_raises_with_status(self):
        async with test_utils.TestServer(_make_app({})) as server:
            base = str(server.make_url("/"))
            api = IPFSHttpApi(base, base)
            try:
                with pytest.raises(IPFSRequestError) as exc_info:
                    await api.cat("QmMissing")
            finally:
                await api.close()
        assert exc_info.value.status == 404
        assert exc_info.value.kind is ErrorKind.IPFS_REQUEST_FAILED

    @pytest.mark.asyncio
    async def test_pins(self):
        async with test_utils.TestServer(_make_app({})) as server:
            base = str(server.make_url("/"))
            api = IPFSHttpApi(base, base)
            try:
                assert await api.pin_add(CID) == [CID]
                assert await api.pin_ls(CID) == {CID: {"Type": "recursive"}}
                with pytest.raises(IPFSRequestError) as exc_info:
                    await api.pin_ls("QmOther")
                assert exc_info.value.status == 500
            finally:
                await api.close()

    def test_gateway_url(self):
        api = IPFSHttpApi("http://node:5001/", "https://gw.test/")
        assert api.gateway_url(CID) == f"https://gw.test/ipfs/{CID}"
        assert api.api_url == "http://node:5001"
