"""
BeautifulSoup-based extraction of player rows from one listing page.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from harvester.scraping.parsing.document import Document, as_soup, clean_text, parse_int
from harvester.scraping.types import Record

MIN_CELLS = 8
EXTERNAL_ID_REGEX = re.compile(r"[?&]id=(\d+)")


class TableLocator(ABC):
    """
    Strategy for finding the data table inside a listing page.
    """

    @abstractmethod
    def locate(self, soup: BeautifulSoup) -> Tag | None:
        """
        Return the target table, or None when the layout is not recognised.
        """


class HeaderTextTableLocator(TableLocator):
    """
    Pick the first table whose header row mentions every marker.
    """

    def __init__(self, markers: Sequence[str] = ("player name", "overall")) -> None:
        self.markers = tuple(marker.lower() for marker in markers if marker)

    def locate(self, soup: BeautifulSoup) -> Tag | None:
        for table in soup.find_all("table"):
            header = table.find("tr")
            if header is None:
                continue
            header_text = clean_text(header).lower()
            if all(marker in header_text for marker in self.markers):
                return table
        return None


class PageExtractor:
    """
    Turn one fetched document into player records.
    """

    def __init__(
        self,
        *,
        base_url: str,
        locator: TableLocator | None = None,
        min_cells: int = MIN_CELLS,
    ) -> None:
        self.base_url = base_url
        self.locator = locator or HeaderTextTableLocator()
        self.min_cells = max(MIN_CELLS, min_cells)

    def parse_page(self, document: Document) -> list[Record]:
        table = self.locator.locate(as_soup(document))
        if table is None:
            return []

        records: list[Record] = []
        for row in table.find_all("tr")[1:]:
            record = self.parse_row(row)
            if record is not None:
                records.append(record)
        return records

    def parse_row(self, row: Tag) -> Record | None:
        cells = row.find_all("td")
        if len(cells) < self.min_cells:
            return None

        name_cell = cells[1]
        source_url = self._resolve_link(name_cell)
        return Record(
            position=clean_text(cells[0]),
            name=clean_text(name_cell),
            team=clean_text(cells[2]),
            nationality=clean_text(cells[3]),
            height=parse_int(clean_text(cells[4])),
            weight=parse_int(clean_text(cells[5])),
            age=parse_int(clean_text(cells[6])),
            rating=parse_int(clean_text(cells[7])),
            source_url=source_url,
            external_id=extract_external_id(source_url),
        )

    def _resolve_link(self, cell: Tag) -> str:
        anchor = cell.find("a", href=True)
        if anchor is None:
            return ""
        href = str(anchor["href"]).strip()
        if not href:
            return ""
        return urljoin(self.base_url, href)


def extract_external_id(url: str) -> str | None:
    if not url:
        return None
    match = EXTERNAL_ID_REGEX.search(url)
    return match.group(1) if match else None
