"""Utility modules for Collection Sync.

This package provides:
- ranges: Bounds checking and mapping helpers for range operations
- logging: Configured logging with JSON/text output support
"""

from collection_sync.utils.ranges import map_range, check_index, check_range, take_span
from collection_sync.utils.logging import get_logger, configure_root_logger

__all__ = [
    "take_span",
    "map_range",
    "check_index",
    "check_range",
    "get_logger",
    "configure_root_logger",
]
