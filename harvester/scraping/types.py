"""
Shared crawl data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class Record:
    """
    One harvested player row.

    Numeric fields are ``None`` when the source cell was empty or not an
    integer; zero is a real value, never a placeholder.
    """

    name: str
    position: str = ""
    team: str = ""
    nationality: str = ""
    height: int | None = None
    weight: int | None = None
    age: int | None = None
    rating: int | None = None
    source_url: str = ""
    external_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.external_id,
            "name": self.name,
            "position": self.position,
            "team": self.team,
            "nationality": self.nationality,
            "height": self.height,
            "weight": self.weight,
            "age": self.age,
            "overall": self.rating,
            "url": self.source_url,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Record":
        external_id = payload.get("id")
        return cls(
            external_id=str(external_id) if external_id not in (None, "") else None,
            name=str(payload.get("name") or ""),
            position=str(payload.get("position") or ""),
            team=str(payload.get("team") or ""),
            nationality=str(payload.get("nationality") or ""),
            height=_optional_int(payload.get("height")),
            weight=_optional_int(payload.get("weight")),
            age=_optional_int(payload.get("age")),
            rating=_optional_int(payload.get("overall")),
            source_url=str(payload.get("url") or ""),
        )


@dataclass(frozen=True)
class Checkpoint:
    """
    Durable crawl cursor. ``last_page_done == 0`` means nothing to resume.
    """

    last_page_done: int = 0

    @property
    def in_progress(self) -> bool:
        return self.last_page_done > 0


@dataclass(frozen=True)
class Snapshot:
    """
    Deduplicated result of one crawl run.
    """

    records: tuple[Record, ...]
    page_count: int
    generated_at: datetime | None

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls(records=(), page_count=0, generated_at=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "players": [record.to_dict() for record in self.records],
            "pages": self.page_count,
            "generatedAt": self.generated_at.isoformat() if self.generated_at else None,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Snapshot":
        players = payload.get("players") or []
        if not isinstance(players, list):
            raise ValueError("Invalid snapshot: 'players' must be a list.")
        return cls(
            records=tuple(Record.from_dict(item) for item in players if isinstance(item, dict)),
            page_count=_optional_int(payload.get("pages")) or 0,
            generated_at=_parse_timestamp(payload.get("generatedAt")),
        )


@dataclass(frozen=True)
class CrawlRunResult:
    """
    Outcome for one crawl run, complete or interrupted.
    """

    snapshot: Snapshot
    completed: bool
    last_page_done: int
    errors: list[str] = field(default_factory=list)


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed
