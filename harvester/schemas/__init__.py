"""
harvester/schemas package marker.
"""

from harvester.schemas.snapshot import PlayerResponse, RefreshResponse, SearchResponse

__all__ = ["PlayerResponse", "RefreshResponse", "SearchResponse"]
