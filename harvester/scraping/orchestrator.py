"""
Checkpointed, resumable crawl over a paginated listing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from harvester.scraping.checkpoint import CheckpointStore
from harvester.scraping.config.models import CrawlSettings
from harvester.scraping.dedupe import dedupe_records
from harvester.scraping.fetcher import Fetcher
from harvester.scraping.logging_utils import log_event
from harvester.scraping.parsing import PageExtractor, as_soup, detect_last_page
from harvester.scraping.politeness import PolitenessDelay
from harvester.scraping.progress import NullProgressSink, ProgressSink
from harvester.scraping.types import CrawlRunResult, Record, Snapshot

logger = logging.getLogger(__name__)

PROGRESS_EVERY_PAGES = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CrawlOrchestrator:
    """
    Drives one crawl run from page discovery to a deduplicated snapshot.

    Pages are handled strictly in order with one request in flight. The
    checkpoint only advances after a page's records are in memory, and a
    resumed run re-fetches the checkpointed page before moving on.
    Callers must not run two crawls against the same checkpoint at once.
    """

    def __init__(
        self,
        *,
        settings: CrawlSettings,
        fetcher: Fetcher,
        extractor: PageExtractor,
        checkpoint: CheckpointStore,
        delay: PolitenessDelay,
        progress: ProgressSink | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher
        self._extractor = extractor
        self._checkpoint = checkpoint
        self._delay = delay
        self._progress = progress or NullProgressSink()
        self._clock = clock

    def run(self, *, carry_over: Sequence[Record] = ()) -> CrawlRunResult:
        """
        Crawl up to the page limit and return the (possibly partial) snapshot.

        `carry_over` holds the records published by the interrupted run that
        left the checkpoint behind; they seed the accumulator only when the
        crawl resumes, so the merged result covers pages before the cursor.

        Failures while probing the first page propagate; failures during the
        page walk stop the walk and are reported in the result.
        """

        first_document = as_soup(self._fetcher.fetch(self._settings.base_url))
        last_page = detect_last_page(first_document, selector=self._settings.pagination_selector)
        limit = self.page_limit(last_page)
        self._progress.on_line(f"Pages detected: {last_page}")

        resume_page = self._checkpoint.load().last_page_done
        if resume_page > limit:
            log_event(
                logger,
                logging.WARNING,
                "checkpoint_stale",
                checkpoint_page=resume_page,
                limit=limit,
            )
            resume_page = 0

        log_event(
            logger,
            logging.INFO,
            "crawl_started",
            base_url=self._settings.base_url,
            last_page=last_page,
            limit=limit,
            resume_page=resume_page,
        )

        accumulator: list[Record] = []
        errors: list[str] = []
        completed = True
        if resume_page == 0:
            last_page_done = 0
            start_page = 2
            try:
                accumulator.extend(self._extractor.parse_page(first_document))
                self._checkpoint.save(1)
            except Exception as exc:
                completed = False
                start_page = limit + 1
                self._report_interruption(errors, 1, self._settings.base_url, last_page_done, exc)
            else:
                last_page_done = 1
        else:
            accumulator.extend(carry_over)
            last_page_done = resume_page
            start_page = resume_page

        for page in range(start_page, limit + 1):
            page_url = self.page_url(page)
            try:
                self._delay.wait()
                records = self._extractor.parse_page(self._fetcher.fetch(page_url))
                accumulator.extend(records)
                self._checkpoint.save(page)
            except Exception as exc:
                completed = False
                self._report_interruption(errors, page, page_url, last_page_done, exc)
                break

            last_page_done = page
            log_event(logger, logging.DEBUG, "page_crawled", page=page, records=len(records))
            if page == resume_page:
                self._progress.on_line(
                    f"Resumed at page {page}/{limit} - total {len(accumulator)}"
                )
            elif page % PROGRESS_EVERY_PAGES == 0:
                self._progress.on_line(f"Progress: page {page}/{limit} - total {len(accumulator)}")

        if completed:
            try:
                self._checkpoint.reset()
                last_page_done = 0
            except Exception as exc:
                # The cursor still points at `limit`; the next run redoes that page only.
                errors.append(f"Checkpoint reset failed: {exc}")
                log_event(logger, logging.ERROR, "checkpoint_reset_failed", error=str(exc))

        deduped = dedupe_records(accumulator)
        snapshot = Snapshot(
            records=tuple(deduped),
            page_count=limit,
            generated_at=self._clock(),
        )
        log_event(
            logger,
            logging.INFO if completed else logging.WARNING,
            "crawl_completed" if completed else "crawl_partial",
            pages=limit,
            records_extracted=len(accumulator),
            records_kept=len(deduped),
            checkpoint_page=last_page_done,
        )
        return CrawlRunResult(
            snapshot=snapshot,
            completed=completed,
            last_page_done=last_page_done,
            errors=errors,
        )

    def _report_interruption(
        self,
        errors: list[str],
        page: int,
        page_url: str,
        last_page_done: int,
        exc: Exception,
    ) -> None:
        message = f"Error at {page_url}: {exc}"
        errors.append(message)
        self._progress.on_line(message)
        log_event(
            logger,
            logging.ERROR,
            "crawl_interrupted",
            page=page,
            page_url=page_url,
            last_page_done=last_page_done,
            error=str(exc),
        )

    def page_limit(self, last_page: int) -> int:
        if self._settings.max_pages > 0:
            return min(last_page, self._settings.max_pages)
        return last_page

    def page_url(self, page: int) -> str:
        base_url = self._settings.base_url
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}page={page}"
