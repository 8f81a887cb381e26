"""
Local file-system and in-memory blob stores.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from harvester.scraping.storage.base import BlobNotFoundError, BlobStore


class FileBlobStore(BlobStore):
    """
    Store each key as a UTF-8 file under one root directory.

    Writes go to a temporary sibling first and are renamed into place, so a
    crash mid-write leaves the previous value readable.
    """

    def __init__(self, *, root: str | Path) -> None:
        self._root = Path(root)

    def read_text(self, key: str) -> str:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise BlobNotFoundError(key) from exc

    def write_text(self, key: str, text: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    def _path(self, key: str) -> Path:
        relative = Path(key)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Invalid blob key '{key}'.")
        return self._root / relative


class InMemoryBlobStore(BlobStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.blobs: dict[str, str] = dict(initial or {})

    def read_text(self, key: str) -> str:
        try:
            return self.blobs[key]
        except KeyError as exc:
            raise BlobNotFoundError(key) from exc

    def write_text(self, key: str, text: str) -> None:
        self.blobs[key] = text
