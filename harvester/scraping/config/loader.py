"""
Environment-driven loader for crawl and storage settings.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from harvester.scraping.config.models import DEFAULT_USER_AGENT, CrawlSettings, StorageSettings

ENV_FILES = (".env", ".env.local")


def project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _read_env_pairs(env_path: Path) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if entry.startswith("export "):
            entry = entry[len("export "):].lstrip()
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        name, _, value = entry.partition("=")
        name = name.strip()
        if name:
            pairs.append((name, value.strip().strip("\"'")))
    return pairs


def load_env_files() -> None:
    """
    Seed os.environ from the project's env files.

    Variables already set in the process win over file values, and
    `.env.local` cannot override a value that `.env` already provided.
    """

    root = project_root()
    for filename in ENV_FILES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for name, value in _read_env_pairs(env_path):
            os.environ.setdefault(name, value)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(item.strip().lower() for item in raw.split(",") if item.strip())
    return items or default


def _resolve_data_dir(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_crawl_settings() -> CrawlSettings:
    """
    Return cached crawl settings from environment variables.
    """

    load_env_files()
    delay_min = max(0.0, _get_float_env("CRAWL_DELAY_MIN_SECONDS", 2.5))
    return CrawlSettings(
        base_url=_get_str_env("CRAWL_BASE_URL", "https://pesdb.net/efootball").rstrip("/"),
        referer=_get_str_env("CRAWL_REFERER", "https://pesdb.net/"),
        user_agent=_get_str_env("CRAWL_USER_AGENT", DEFAULT_USER_AGENT),
        accept_language=_get_str_env("CRAWL_ACCEPT_LANGUAGE", "es-AR,es;q=0.9,en;q=0.8"),
        timeout_seconds=max(1.0, _get_float_env("CRAWL_TIMEOUT_SECONDS", 30.0)),
        max_attempts=max(1, _get_int_env("CRAWL_MAX_ATTEMPTS", 5)),
        max_backoff_seconds=max(1.0, _get_float_env("CRAWL_MAX_BACKOFF_SECONDS", 60.0)),
        delay_min_seconds=delay_min,
        delay_max_seconds=max(delay_min, _get_float_env("CRAWL_DELAY_MAX_SECONDS", 4.0)),
        max_pages=max(0, _get_int_env("CRAWL_MAX_PAGES", 100)),
        pagination_selector=_get_str_env("CRAWL_PAGINATION_SELECTOR", ".pages a"),
        table_markers=_get_list_env("CRAWL_TABLE_MARKERS", ("player name", "overall")),
    )


@lru_cache(maxsize=1)
def get_storage_settings() -> StorageSettings:
    """
    Return cached blob storage settings from environment variables.
    """

    load_env_files()
    return StorageSettings(
        data_dir=str(_resolve_data_dir(_get_str_env("HARVESTER_DATA_DIR", "data"))),
        snapshot_key=_get_str_env("HARVESTER_SNAPSHOT_KEY", "data.json"),
        checkpoint_key=_get_str_env("HARVESTER_CHECKPOINT_KEY", "checkpoint.json"),
    )
