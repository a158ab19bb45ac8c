"""Observable collections for Collection Sync.

This package provides:
- ObservableSequence: the contract a collection must satisfy to be synchronized
- ObservableList: list-backed reference implementation
"""

from collection_sync.observables.base import ObservableSequence, ChangeHandler
from collection_sync.observables.observable_list import ObservableList

__all__ = [
    "ObservableSequence",
    "ChangeHandler",
    "ObservableList",
]
