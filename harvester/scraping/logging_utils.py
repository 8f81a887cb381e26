"""
Structured logging helpers for crawl runs.
"""

from __future__ import annotations

import json
import logging
from typing import Any


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one crawl event as a compact, key-sorted JSON line.

    Values that are not JSON-native (datetimes, exceptions) are rendered with
    ``str`` so a log call can never fail the crawl itself.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
