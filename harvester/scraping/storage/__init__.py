"""
Storage layer exports.
"""

from harvester.scraping.storage.base import BlobNotFoundError, BlobStore
from harvester.scraping.storage.file_storage import FileBlobStore, InMemoryBlobStore
from harvester.scraping.storage.snapshot_repository import SnapshotRepository

__all__ = [
    "BlobNotFoundError",
    "BlobStore",
    "FileBlobStore",
    "InMemoryBlobStore",
    "SnapshotRepository",
]
