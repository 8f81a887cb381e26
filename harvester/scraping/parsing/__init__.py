"""
Parsing layer exports.
"""

from harvester.scraping.parsing.document import as_soup
from harvester.scraping.parsing.extractor import (
    HeaderTextTableLocator,
    PageExtractor,
    TableLocator,
    extract_external_id,
)
from harvester.scraping.parsing.pagination import detect_last_page

__all__ = [
    "HeaderTextTableLocator",
    "PageExtractor",
    "TableLocator",
    "as_soup",
    "detect_last_page",
    "extract_external_id",
]
