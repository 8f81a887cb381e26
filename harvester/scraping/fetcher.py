"""
Politeness-aware HTTP fetcher with bounded exponential backoff.
"""

from __future__ import annotations

import logging

import requests

from harvester.scraping.config.models import CrawlSettings
from harvester.scraping.logging_utils import log_event
from harvester.scraping.politeness import PolitenessDelay
from harvester.scraping.progress import NullProgressSink, ProgressSink

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """
    Terminal fetch failure. ``status`` is ``None`` when no response arrived.
    """

    def __init__(self, url: str, status: int | None, message: str | None = None) -> None:
        self.url = url
        self.status = status
        detail = message or (f"HTTP {status}" if status is not None else "request failed")
        super().__init__(f"{detail} for {url}")

    @property
    def retryable(self) -> bool:
        return is_retryable_status(self.status)


def is_retryable_status(status: int | None) -> bool:
    if status is None:
        return False
    return status == 429 or 500 <= status < 600


class Fetcher:
    """
    Issues one GET at a time, retrying rate-limit and server errors.
    """

    def __init__(
        self,
        *,
        settings: CrawlSettings,
        session: requests.Session,
        delay: PolitenessDelay,
        progress: ProgressSink | None = None,
    ) -> None:
        self.settings = settings
        self.session = session
        self.delay = delay
        self.progress = progress or NullProgressSink()
        self.request_headers = settings.request_headers()

    def fetch(self, url: str) -> str:
        """
        Return the response body for `url` or raise `FetchError`.
        """

        attempt = 0
        while True:
            try:
                response = self.session.get(
                    url,
                    headers=self.request_headers,
                    timeout=self.settings.timeout_seconds,
                    allow_redirects=True,
                )
            except requests.RequestException as exc:
                log_event(logger, logging.ERROR, "fetch_failed", url=url, error=str(exc))
                raise FetchError(url, None, message=f"Request error: {exc}") from exc

            status = response.status_code
            if 200 <= status < 300:
                return response.text

            if not is_retryable_status(status):
                log_event(logger, logging.ERROR, "fetch_failed", url=url, status_code=status)
                raise FetchError(url, status)

            attempt += 1
            if attempt >= self.settings.max_attempts:
                log_event(
                    logger,
                    logging.ERROR,
                    "fetch_retries_exhausted",
                    url=url,
                    status_code=status,
                    attempts=attempt,
                )
                raise FetchError(
                    url,
                    status,
                    message=f"HTTP {status} after {attempt} attempts",
                )

            wait_seconds = self.backoff_seconds(attempt)
            self.progress.on_line(
                f"HTTP {status} at {url}. Attempt {attempt}/{self.settings.max_attempts} failed, "
                f"retrying in {round(wait_seconds)}s"
            )
            log_event(
                logger,
                logging.WARNING,
                "fetch_retry",
                url=url,
                status_code=status,
                attempt=attempt,
                wait_seconds=round(wait_seconds, 3),
            )
            self.delay.sleep(wait_seconds)

    def backoff_seconds(self, attempt: int) -> float:
        capped = min(self.settings.max_backoff_seconds, float(2 ** min(attempt, 32)))
        return capped + self.delay.jitter_seconds()
