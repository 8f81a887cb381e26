"""
harvester/services/snapshot_service.py

Owns the published snapshot and runs crawl refreshes.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache

import requests

from harvester.scraping.checkpoint import CheckpointStore
from harvester.scraping.config import (
    CrawlSettings,
    StorageSettings,
    get_crawl_settings,
    get_storage_settings,
)
from harvester.scraping.fetcher import Fetcher
from harvester.scraping.logging_utils import log_event
from harvester.scraping.orchestrator import CrawlOrchestrator
from harvester.scraping.parsing import HeaderTextTableLocator, PageExtractor
from harvester.scraping.politeness import PolitenessDelay
from harvester.scraping.progress import NullProgressSink, ProgressSink
from harvester.scraping.storage import BlobStore, FileBlobStore, SnapshotRepository
from harvester.scraping.types import CrawlRunResult, Record, Snapshot

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 500


class RefreshInProgressError(RuntimeError):
    """
    Raised when a refresh is requested while another one is running.
    """


def build_crawl_orchestrator(
    *,
    settings: CrawlSettings,
    session: requests.Session,
    checkpoint: CheckpointStore,
    progress: ProgressSink,
    delay: PolitenessDelay | None = None,
) -> CrawlOrchestrator:
    """
    Wire the crawl components for one run.
    """

    delay = delay or PolitenessDelay(
        min_seconds=settings.delay_min_seconds,
        max_seconds=settings.delay_max_seconds,
    )
    fetcher = Fetcher(settings=settings, session=session, delay=delay, progress=progress)
    extractor = PageExtractor(
        base_url=settings.base_url,
        locator=HeaderTextTableLocator(settings.table_markers),
    )
    return CrawlOrchestrator(
        settings=settings,
        fetcher=fetcher,
        extractor=extractor,
        checkpoint=checkpoint,
        delay=delay,
        progress=progress,
    )


class SnapshotService:
    """
    Holds the current snapshot and replaces it only when a refresh finishes.
    """

    def __init__(
        self,
        *,
        crawl_settings: CrawlSettings,
        store: BlobStore,
        storage_settings: StorageSettings | None = None,
        session: requests.Session | None = None,
        delay: PolitenessDelay | None = None,
    ) -> None:
        storage_settings = storage_settings or StorageSettings()
        self._crawl_settings = crawl_settings
        self._session = session or requests.Session()
        self._delay = delay
        self._repository = SnapshotRepository(store=store, key=storage_settings.snapshot_key)
        self._checkpoint = CheckpointStore(store=store, key=storage_settings.checkpoint_key)
        self._refresh_lock = threading.Lock()
        self._snapshot = self._repository.load()

    def current(self) -> Snapshot:
        return self._snapshot

    def refresh(self, *, progress: ProgressSink | None = None) -> CrawlRunResult:
        """
        Run one crawl and publish its snapshot, partial or complete.
        """

        if not self._refresh_lock.acquire(blocking=False):
            raise RefreshInProgressError("A refresh is already running.")
        try:
            orchestrator = build_crawl_orchestrator(
                settings=self._crawl_settings,
                session=self._session,
                checkpoint=self._checkpoint,
                progress=progress or NullProgressSink(),
                delay=self._delay,
            )
            result = orchestrator.run(carry_over=self._snapshot.records)
            # The in-memory snapshot must match the checkpoint even when saving fails.
            self._snapshot = result.snapshot
            try:
                self._repository.save(result.snapshot)
            except OSError as exc:
                result.errors.append(f"Snapshot save failed: {exc}")
                log_event(logger, logging.ERROR, "snapshot_save_failed", error=str(exc))
            log_event(
                logger,
                logging.INFO,
                "snapshot_published",
                players=len(result.snapshot.records),
                pages=result.snapshot.page_count,
                completed=result.completed,
            )
            return result
        finally:
            self._refresh_lock.release()

    def search(self, query: str, *, limit: int | None = None) -> tuple[int, list[Record]]:
        """
        Case-insensitive substring match on player name.

        Returns the total match count and at most `limit` records.
        """

        needle = (query or "").strip().lower()
        bounded = max(1, min(MAX_SEARCH_LIMIT, limit or DEFAULT_SEARCH_LIMIT))
        if not needle:
            return 0, []
        matches = [record for record in self._snapshot.records if needle in record.name.lower()]
        return len(matches), matches[:bounded]


@lru_cache(maxsize=1)
def get_snapshot_service() -> SnapshotService:
    """
    Build and cache the process-wide snapshot service.
    """

    storage_settings = get_storage_settings()
    return SnapshotService(
        crawl_settings=get_crawl_settings(),
        storage_settings=storage_settings,
        store=FileBlobStore(root=storage_settings.data_dir),
    )
