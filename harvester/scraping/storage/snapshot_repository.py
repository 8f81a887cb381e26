"""
JSON persistence for published snapshots.
"""

from __future__ import annotations

import json
import logging

from harvester.scraping.logging_utils import log_event
from harvester.scraping.storage.base import BlobNotFoundError, BlobStore
from harvester.scraping.types import Snapshot

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """
    Load and save the published snapshot through a blob store.
    """

    def __init__(self, *, store: BlobStore, key: str = "data.json") -> None:
        self._store = store
        self._key = key

    def load(self) -> Snapshot:
        """
        Return the stored snapshot, or an empty one if missing or unreadable.
        """

        try:
            payload = json.loads(self._store.read_text(self._key))
            if not isinstance(payload, dict):
                raise ValueError("snapshot payload must be an object")
            snapshot = Snapshot.from_dict(payload)
        except BlobNotFoundError:
            log_event(logger, logging.INFO, "snapshot_missing", key=self._key)
            return Snapshot.empty()
        except (ValueError, OverflowError) as exc:
            log_event(logger, logging.WARNING, "snapshot_unreadable", key=self._key, error=str(exc))
            return Snapshot.empty()

        log_event(
            logger,
            logging.INFO,
            "snapshot_loaded",
            key=self._key,
            players=len(snapshot.records),
            pages=snapshot.page_count,
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        self._store.write_text(
            self._key,
            json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2),
        )
