"""
harvester/api/routers/snapshot.py

Snapshot search, dump and refresh endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from harvester.schemas.snapshot import PlayerResponse, RefreshResponse, SearchResponse
from harvester.scraping.fetcher import FetchError
from harvester.scraping.progress import CollectingProgressSink
from harvester.services.snapshot_service import (
    DEFAULT_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
    RefreshInProgressError,
    SnapshotService,
    get_snapshot_service,
)

router = APIRouter(tags=["snapshot"])


@router.get("/search", response_model=SearchResponse)
def search_players(
    q: str = Query(default="", description="Name or surname fragment"),
    limit: int = Query(default=DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_SEARCH_LIMIT),
    service: SnapshotService = Depends(get_snapshot_service),
) -> SearchResponse:
    """
    Search the published snapshot by player name.
    """

    count, records = service.search(q, limit=limit)
    return SearchResponse(
        count=count,
        results=[PlayerResponse.from_record(record) for record in records],
    )


@router.get("/players.json")
def dump_players(
    service: SnapshotService = Depends(get_snapshot_service),
) -> dict[str, Any]:
    return service.current().to_dict()


@router.post("/refresh", response_model=RefreshResponse)
def refresh_snapshot(
    service: SnapshotService = Depends(get_snapshot_service),
) -> RefreshResponse:
    """
    Re-crawl the source and publish the new snapshot.
    """

    progress = CollectingProgressSink()
    try:
        result = service.refresh(progress=progress)
    except RefreshInProgressError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    snapshot = result.snapshot
    return RefreshResponse(
        completed=result.completed,
        players=len(snapshot.records),
        pages=snapshot.page_count,
        checkpoint_page=result.last_page_done,
        generated_at=snapshot.generated_at,
        errors=result.errors,
        progress=progress.lines,
    )
