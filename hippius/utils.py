import asyncio
import functools
import logging
import os
import re
import typing as tp

_LOGGER = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def format_cid(cid: str) -> str:
    """Format a CID for display.

    :param cid: Regular or hex-encoded CID

    :return: Regular CID
    """

    if not cid:
        return ""
    if cid.startswith("Qm") or cid.startswith("bafy"):
        return cid
    if _HEX_RE.match(cid):
        return hex_to_ipfs_cid(cid)
    return cid


def hex_to_ipfs_cid(hex_string: str) -> str:
    """Convert a CID stored on chain as hex of its text form.

    :param hex_string: Hex string, with or without 0x prefix

    :return: Decoded CID, or the input unchanged if it doesn't decode to one
    """

    if hex_string.startswith("0x"):
        hex_string = hex_string[2:]
    try:
        decoded = bytes.fromhex(hex_string).decode("ascii")
    except (ValueError, UnicodeDecodeError):
        return hex_string
    if decoded.startswith("Qm") or decoded.startswith("bafy"):
        return decoded
    return hex_string


def format_size(size_bytes: int) -> str:
    """Format a size in bytes to a human-readable string, e.g. '1.23 MB'."""

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.2f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def is_printable_text(data: bytes) -> bool:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return all(char in "\t\n\r" or " " <= char <= "~" for char in text)


def to_thread(func: tp.Callable) -> tp.Callable[..., tp.Coroutine]:
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)

    return wrapper


@to_thread
def read_file_data(filename: str) -> bytes:
    with open(filename, "rb") as f:
        data = f.read()
    return data


@to_thread
def write_file_data(filename: str, data: bytes) -> None:
    dirname = os.path.dirname(filename)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(filename, "wb") as f:
        f.write(data)
    _LOGGER.debug(f"Wrote {len(data)} bytes to {filename}")
