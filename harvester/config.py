"""
harvester/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from harvester.scraping.config.loader import _get_str_env, load_env_files


@dataclass(frozen=True)
class AppSettings:
    """
    Process-level settings for the API and CLI.
    """

    log_level: str = "INFO"
    title: str = "Player Snapshot API"


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings.
    """

    load_env_files()
    return AppSettings(
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
        title=_get_str_env("HARVESTER_API_TITLE", "Player Snapshot API"),
    )
