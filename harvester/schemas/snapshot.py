"""
harvester/schemas/snapshot.py

Response schemas for snapshot search and refresh.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from harvester.scraping.types import Record


class PlayerResponse(BaseModel):
    """
    API response model for one harvested player.
    """

    id: str | None = None
    name: str
    position: str = ""
    team: str = ""
    nationality: str = ""
    height: int | None = None
    weight: int | None = None
    age: int | None = None
    overall: int | None = None
    url: str = ""

    @classmethod
    def from_record(cls, record: Record) -> "PlayerResponse":
        return cls(**record.to_dict())


class SearchResponse(BaseModel):
    count: int = Field(..., ge=0)
    results: list[PlayerResponse] = Field(default_factory=list)


class RefreshResponse(BaseModel):
    """
    Summary of one refresh run.
    """

    completed: bool
    players: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)
    checkpoint_page: int = Field(..., ge=0)
    generated_at: datetime | None = None
    errors: list[str] = Field(default_factory=list)
    progress: list[str] = Field(default_factory=list)
