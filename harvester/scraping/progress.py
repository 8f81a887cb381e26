"""
Progress sinks for human-readable crawl feedback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from harvester.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    def on_line(self, line: str) -> None:
        ...


class NullProgressSink:
    def on_line(self, line: str) -> None:
        return None


class LoggingProgressSink:
    """
    Forward progress lines to the structured log.
    """

    def __init__(self, *, level: int = logging.INFO) -> None:
        self._level = level

    def on_line(self, line: str) -> None:
        log_event(logger, self._level, "crawl_progress", line=line)


class CollectingProgressSink:
    """
    Keep every progress line in memory, in emission order.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def on_line(self, line: str) -> None:
        self.lines.append(line)


class CallbackProgressSink:
    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def on_line(self, line: str) -> None:
        self._callback(line)
