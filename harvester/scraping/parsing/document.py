"""
Thin adapter over BeautifulSoup used by every page parser.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

Document = BeautifulSoup | str


def as_soup(document: Document) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document or "", "html.parser")


def clean_text(node: Tag | None) -> str:
    if node is None:
        return ""
    return re.sub(r"\s+", " ", node.get_text(" ", strip=True)).strip()


def parse_int(value: str) -> int | None:
    """
    Parse a whole number, returning None for blanks and non-numeric text.
    """

    stripped = value.strip()
    if not stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        return None
