"""
Durable crawl cursor backed by a blob store.
"""

from __future__ import annotations

import json
import logging

from harvester.scraping.logging_utils import log_event
from harvester.scraping.storage.base import BlobNotFoundError, BlobStore
from harvester.scraping.types import Checkpoint

logger = logging.getLogger(__name__)


class CheckpointStore:
    """
    Reads and writes `{"lastPageDone": N}` under one key.
    """

    def __init__(self, *, store: BlobStore, key: str = "checkpoint.json") -> None:
        self._store = store
        self._key = key

    def load(self) -> Checkpoint:
        """
        Return the saved cursor; missing or corrupt data reads as page 0.
        """

        try:
            payload = json.loads(self._store.read_text(self._key))
            value = payload.get("lastPageDone", 0) if isinstance(payload, dict) else None
            if isinstance(value, bool) or not isinstance(value, (int, float, str)):
                raise ValueError(f"unexpected lastPageDone={value!r}")
            last_page_done = int(value)
        except BlobNotFoundError:
            return Checkpoint()
        except (ValueError, OverflowError) as exc:
            log_event(
                logger,
                logging.WARNING,
                "checkpoint_unreadable",
                key=self._key,
                error=str(exc),
            )
            return Checkpoint()

        return Checkpoint(last_page_done=max(0, last_page_done))

    def save(self, page: int) -> None:
        if page < 0:
            raise ValueError(f"Checkpoint page must be >= 0, got {page}.")
        self._store.write_text(self._key, json.dumps({"lastPageDone": page}, indent=2))

    def reset(self) -> None:
        self.save(0)
