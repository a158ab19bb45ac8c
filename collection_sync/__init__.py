"""Collection Sync - Keep two observable collections mirrored.

A small library for projecting one ordered collection into another (for
example domain models into view models) without re-synchronizing by hand
after every mutation.

Key Features:
    - One-way or two-way mirroring through a pair of mapping functions
    - Add, remove, replace, move and reset changes relayed as they happen
    - Relay guard that stops mirrored changes from echoing back
    - Explicit rebuild for recovering after a failed mapping
    - List-backed ObservableList, or bring your own ObservableSequence

Quick Start:
    from collection_sync import ObservableList, Synchronizer

    prices = ObservableList([1, 2, 3])
    cents = ObservableList([100, 200, 300])

    sync = Synchronizer(
        prices, cents,
        to_source=lambda c: c // 100,
        to_target=lambda p: p * 100,
    )

    prices.append(4)      # cents == [100, 200, 300, 400]
    cents.pop(0)          # prices == [2, 3, 4]

    sync.dispose()        # the lists evolve independently from here on

Classes:
    Synchronizer: Relays changes between a source and a target collection
    SyncConfig: Mode and add strategy for a Synchronizer
    SyncMode: Enum for relay directions (ONE_WAY_TO_TARGET, ONE_WAY_TO_SOURCE, TWO_WAY)
    AddStrategy: Enum for where relayed additions land (APPEND, MIRROR_INDEX)
    ChangeEvent: Immutable record of one structural mutation
    ObservableList: Reference observable collection

See Also:
    - examples/ for usage patterns
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Core configuration classes
from .config import (
    SyncConfig,
    SyncMode,
    AddStrategy,
)

# Errors
from .errors import (
    CollectionSyncError,
    InvalidArgumentError,
    MappingError,
    SynchronizerDisposedError,
)

# Change events
from .events import ChangeAction, ChangeEvent

# Observable collections (for extension)
from .observables import ObservableSequence, ObservableList

# Sync components
from .sync import Synchronizer, RelayStats, RelayDirection

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Main classes
    "Synchronizer",
    "SyncConfig",
    "RelayStats",
    # Enums
    "SyncMode",
    "AddStrategy",
    "RelayDirection",
    "ChangeAction",
    # Events and collections
    "ChangeEvent",
    "ObservableSequence",
    "ObservableList",
    # Errors
    "CollectionSyncError",
    "InvalidArgumentError",
    "MappingError",
    "SynchronizerDisposedError",
    # Helpers
    "create_synchronizer",
]


def create_synchronizer(
    source,
    target,
    to_source,
    to_target,
    mode: str = "two_way",
    add_strategy: str = "append",
) -> Synchronizer:
    """Convenience function to create a Synchronizer from string options.

    Args:
        source: Observable source collection
        target: Observable target collection
        to_source: Maps target elements to source elements
        to_target: Maps source elements to target elements
        mode: "two_way", "one_way_to_target" or "one_way_to_source"
        add_strategy: "append" or "mirror_index"

    Returns:
        Attached Synchronizer instance

    Example:
        sync = create_synchronizer(models, rows, Model.from_row, Row.from_model,
                                   mode="one_way_to_target")
    """
    config = SyncConfig(
        mode=SyncMode(mode.lower()),
        add_strategy=AddStrategy(add_strategy.lower()),
    )

    return Synchronizer(source, target, to_source, to_target, config)
