"""
Config helpers for crawl runs.
"""

from harvester.scraping.config.loader import get_crawl_settings, get_storage_settings
from harvester.scraping.config.models import CrawlSettings, StorageSettings

__all__ = [
    "CrawlSettings",
    "StorageSettings",
    "get_crawl_settings",
    "get_storage_settings",
]
