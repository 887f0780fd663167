"""Outbound sharing — canonical public URLs and share-sheet helpers."""

from deeplink.sharing.builder import ShareContent, ShareKind, build_share_url, to_public_url
from deeplink.sharing.share import ShareResult, Sharer, ShareSheet

__all__ = [
    "ShareContent",
    "ShareKind",
    "ShareResult",
    "ShareSheet",
    "Sharer",
    "build_share_url",
    "to_public_url",
]
