"""
Final merge pass over harvested records.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from harvester.scraping.types import Record


def merge_key(record: Record) -> tuple[Hashable, ...]:
    if record.external_id:
        return ("id", record.external_id)
    return ("composite", record.name, record.team, record.age)


def dedupe_records(records: Iterable[Record]) -> list[Record]:
    """
    Keep the first record seen for each merge key, preserving order.
    """

    seen: set[tuple[Hashable, ...]] = set()
    deduped: list[Record] = []
    for record in records:
        key = merge_key(record)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(record)
    return deduped
