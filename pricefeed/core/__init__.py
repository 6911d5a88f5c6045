"""Core price pipeline modules exposed for external consumers."""

from .assembler import SnapshotAssembler, to_document
from .config import FeedSettings, load_feed_settings
from .fetcher import Fetcher

__all__ = [
    "SnapshotAssembler",
    "to_document",
    "FeedSettings",
    "load_feed_settings",
    "Fetcher",
]
