from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from harvester.scraping.checkpoint import CheckpointStore
from harvester.scraping.config.models import CrawlSettings
from harvester.scraping.fetcher import Fetcher
from harvester.scraping.orchestrator import CrawlOrchestrator
from harvester.scraping.parsing import PageExtractor
from harvester.scraping.politeness import PolitenessDelay
from harvester.scraping.progress import CollectingProgressSink
from harvester.scraping.storage import InMemoryBlobStore
from tests.helpers import BASE_URL, FakeSession, SleepRecorder


@pytest.fixture()
def settings() -> CrawlSettings:
    return CrawlSettings(base_url=BASE_URL, max_pages=0)


@pytest.fixture()
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def delay(sleeps: SleepRecorder) -> PolitenessDelay:
    return PolitenessDelay(min_seconds=2.5, max_seconds=4.0, rng=random.Random(7), sleep=sleeps)


@pytest.fixture()
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture()
def checkpoint(blob_store: InMemoryBlobStore) -> CheckpointStore:
    return CheckpointStore(store=blob_store)


@pytest.fixture()
def progress() -> CollectingProgressSink:
    return CollectingProgressSink()


@pytest.fixture()
def make_orchestrator(
    settings: CrawlSettings,
    delay: PolitenessDelay,
    checkpoint: CheckpointStore,
    progress: CollectingProgressSink,
) -> Callable[..., CrawlOrchestrator]:
    def _build(
        session: FakeSession,
        crawl_settings: CrawlSettings | None = None,
        checkpoint_store: CheckpointStore | None = None,
    ) -> CrawlOrchestrator:
        active = crawl_settings or settings
        fetcher = Fetcher(
            settings=active,
            session=session,  # type: ignore[arg-type]
            delay=delay,
            progress=progress,
        )
        return CrawlOrchestrator(
            settings=active,
            fetcher=fetcher,
            extractor=PageExtractor(base_url=active.base_url),
            checkpoint=checkpoint_store or checkpoint,
            delay=delay,
            progress=progress,
        )

    return _build

