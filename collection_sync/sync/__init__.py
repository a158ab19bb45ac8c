"""Synchronization module for Collection Sync.

Philosophy: EVERY CHANGE IS RELAYED ONCE.

This module provides:
- Synchronizer: Mirrors structural changes between two observable collections
- RelayStats: Counters for relays, rebuilds and mapping failures
- RelayDirection: Which way a change travels

Items are mapped before the opposite collection is touched.
"""

from collection_sync.sync.synchronizer import Synchronizer, RelayStats, RelayDirection

__all__ = [
    "Synchronizer",
    "RelayStats",
    "RelayDirection",
]
