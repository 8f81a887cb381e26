"""
Incremental harvester for paginated player tables.
"""

__version__ = "0.1.0"
