"""
Paginator probing for listing pages.
"""

from __future__ import annotations

from harvester.scraping.parsing.document import Document, as_soup, clean_text, parse_int

DEFAULT_PAGINATION_SELECTOR = ".pages a"


def detect_last_page(document: Document, *, selector: str = DEFAULT_PAGINATION_SELECTOR) -> int:
    """
    Return the highest numeric paginator label, or 1 when there is none.

    Labels such as "Next" or "»" are ignored.
    """

    soup = as_soup(document)
    last = 1
    for link in soup.select(selector):
        number = parse_int(clean_text(link))
        if number is not None and number > last:
            last = number
    return last
