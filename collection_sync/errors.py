"""Exceptions raised by Collection Sync."""

from typing import Any, Optional


class CollectionSyncError(Exception):
    """Base class for all collection_sync errors."""


class InvalidArgumentError(CollectionSyncError, ValueError):
    """A required argument was missing or of the wrong kind.

    Attributes:
        argument: Name of the offending parameter
    """

    def __init__(self, argument: str, message: Optional[str] = None):
        self.argument = argument
        super().__init__(message or f"{argument} is required")


class MappingError(CollectionSyncError):
    """A mapping function raised while relaying a change.

    The original exception is chained as ``__cause__``.

    Attributes:
        direction: RelayDirection the relay was travelling in
        item: The element that failed to map
    """

    def __init__(self, direction: Any, item: Any, cause: BaseException):
        self.direction = direction
        self.item = item
        super().__init__(
            f"Mapping {item!r} failed relaying {direction.value}: {cause}"
        )


class SynchronizerDisposedError(CollectionSyncError, RuntimeError):
    """Operation attempted on a Synchronizer after dispose()."""
