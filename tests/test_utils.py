"""Tests for formatting and file helpers."""

from __future__ import annotations

import pytest

from hippius.utils import (
    format_cid,
    format_size,
    hex_to_ipfs_cid,
    is_printable_text,
    read_file_data,
    write_file_data,
)

CID_V0 = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"
CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


class TestFormatCid:
    @pytest.mark.parametrize("cid", [CID_V0, CID_V1])
    def test_regular_cid_unchanged(self, cid):
        assert format_cid(cid) == cid

    def test_hex_cid_is_decoded(self):
        assert format_cid(CID_V0.encode().hex()) == CID_V0

    def test_empty(self):
        assert format_cid("") == ""

    def test_other_strings_unchanged(self):
        assert format_cid("hello") == "hello"


class TestHexToIpfsCid:
    def test_with_prefix(self):
        assert hex_to_ipfs_cid("0x" + CID_V1.encode().hex()) == CID_V1

    def test_not_a_cid(self):
        assert hex_to_ipfs_cid("deadbeef") == "deadbeef"

    def test_odd_length(self):
        assert hex_to_ipfs_cid("abc") == "abc"


class TestFormatSize:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (1024 * 1024, "1.00 MB"),
            (5 * 1024**3, "5.00 GB"),
        ],
    )
    def test_units(self, size, expected):
        assert format_size(size) == expected


class TestIsPrintableText:
    def test_text(self):
        assert is_printable_text(b"hello\nworld\t!")

    def test_binary(self):
        assert not is_printable_text(b"\x00\x01\x02")

    def test_invalid_utf8(self):
        assert not is_printable_text(b"\xff\xfe")


class TestFileHelpers:
    @pytest.mark.asyncio
    async def test_write_creates_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.bin"
        await write_file_data(str(target), b"\x00data")
        assert target.read_bytes() == b"\x00data"
        assert await read_file_data(str(target)) == b"\x00data"
