"""
Blob storage interfaces for snapshot and checkpoint persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobNotFoundError(KeyError):
    """
    Raised when a key has never been written.
    """

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Blob not found: {self.key}"


class BlobStore(ABC):
    """
    Minimal text key-value store with load/save semantics.
    """

    @abstractmethod
    def read_text(self, key: str) -> str:
        """
        Return the stored text or raise `BlobNotFoundError`.
        """

    @abstractmethod
    def write_text(self, key: str, text: str) -> None:
        """
        Persist `text` under `key`, replacing any previous value.
        """
