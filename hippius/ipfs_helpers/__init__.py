from .http_api import IPFSHttpApi
from .ipfs_client import (
    CatResult,
    DownloadResult,
    ExistsResult,
    IPFSClient,
    PinResult,
    PinStatus,
    PublishResult,
    UploadResult,
)

__all__ = [
    "CatResult",
    "DownloadResult",
    "ExistsResult",
    "IPFSClient",
    "IPFSHttpApi",
    "PinResult",
    "PinStatus",
    "PublishResult",
    "UploadResult",
]
