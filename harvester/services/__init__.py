"""
harvester/services package marker.
"""

from harvester.services.snapshot_service import (
    RefreshInProgressError,
    SnapshotService,
    build_crawl_orchestrator,
    get_snapshot_service,
)

__all__ = [
    "RefreshInProgressError",
    "SnapshotService",
    "build_crawl_orchestrator",
    "get_snapshot_service",
]
