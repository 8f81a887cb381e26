"""
harvester/api/routers package marker.
"""

from harvester.api.routers.snapshot import router as snapshot_router

__all__ = ["snapshot_router"]
