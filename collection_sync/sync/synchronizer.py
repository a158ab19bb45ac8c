"""Synchronizer: keeps two observable collections mirrored.

Philosophy: EVERY CHANGE IS RELAYED ONCE.

A change on one side is replayed on the other through a mapping function:
- ADD: mapped items appended (or inserted at the mirrored index)
- REMOVE: same span removed
- REPLACE: same span replaced by the mapped items
- MOVE: same span moved, elements carried over unchanged
- RESET: other side rebuilt from a snapshot

A relay guard stops the mirrored mutation from being relayed back. The guard
is released in a finally block, so a failing mapping function never leaves
the pair stuck.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from collection_sync.config import AddStrategy, SyncConfig, SyncMode
from collection_sync.errors import (
    InvalidArgumentError,
    MappingError,
    SynchronizerDisposedError,
)
from collection_sync.events import ChangeAction, ChangeEvent
from collection_sync.utils.ranges import map_range

logger = logging.getLogger(__name__)


class RelayDirection(Enum):
    """Direction a change travels in."""
    TO_TARGET = "to_target"
    TO_SOURCE = "to_source"


@dataclass
class RelayStats:
    """Counters describing what a Synchronizer has relayed."""

    relays_to_target: int = 0
    relays_to_source: int = 0
    rebuilds: int = 0
    suppressed: int = 0   # events ignored because a relay was in progress
    mapping_failures: int = 0
    last_error: Optional[str] = None
    by_action: Dict[str, int] = field(default_factory=dict)

    def record(self, direction: RelayDirection, action: ChangeAction) -> None:
        """Count one completed relay."""
        if direction is RelayDirection.TO_TARGET:
            self.relays_to_target += 1
        else:
            self.relays_to_source += 1
        self.by_action[action.value] = self.by_action.get(action.value, 0) + 1

    @property
    def total_relays(self) -> int:
        return self.relays_to_target + self.relays_to_source

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "relays_to_target": self.relays_to_target,
            "relays_to_source": self.relays_to_source,
            "total_relays": self.total_relays,
            "rebuilds": self.rebuilds,
            "suppressed": self.suppressed,
            "mapping_failures": self.mapping_failures,
            "last_error": self.last_error,
            "by_action": dict(self.by_action),
        }


def _require_collection(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(name)
    for hook in ("on_change", "remove_change"):
        if not callable(getattr(value, hook, None)):
            raise InvalidArgumentError(
                name, f"{name} must be an observable sequence (missing {hook})"
            )


def _require_mapping(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(name)
    if not callable(value):
        raise InvalidArgumentError(name, f"{name} must be callable")


class Synchronizer:
    """Mirror structural changes between a source and a target collection.

    Both collections stay owned by the caller; the synchronizer only keeps
    the subscriptions that link them. No reconciliation happens at
    construction: only changes made afterwards are relayed.

    Attributes:
        config: SyncConfig with mode and add strategy
        stats: RelayStats updated after every relay

    Example:
        orders = ObservableList([1, 2, 3])
        labels = ObservableList(["1", "2", "3"])
        sync = Synchronizer(orders, labels, to_source=int, to_target=str)
        orders.append(4)          # labels == ["1", "2", "3", "4"]
        sync.dispose()
    """

    def __init__(
        self,
        source,
        target,
        to_source: Callable[[Any], Any],
        to_target: Callable[[Any], Any],
        config: Optional[SyncConfig] = None,
    ):
        """Validate inputs and subscribe according to config.mode.

        Args:
            source: Observable collection of source elements
            target: Observable collection of target elements
            to_source: Maps a target element to a source element
            to_target: Maps a source element to a target element
            config: Sync settings (defaults to two-way, append)

        Raises:
            InvalidArgumentError: If a required argument is missing or unusable
        """
        _require_collection(source, "source")
        _require_collection(target, "target")
        _require_mapping(to_source, "to_source")
        _require_mapping(to_target, "to_target")

        self.config = config or SyncConfig()
        self.stats = RelayStats()

        self._source = source
        self._target = target
        self._to_source = to_source
        self._to_target = to_target
        self._mode = self.config.mode

        self._relay_depth = 0
        self._disposed = False
        self._label = self.config.name or (
            f"{type(source).__name__}->{type(target).__name__}"
        )

        if self._mode.relays_to_target:
            self._source.on_change(self._on_source_changed)
        if self._mode.relays_to_source:
            self._target.on_change(self._on_target_changed)

        logger.info(f"Synchronizer {self._label} attached ({self._mode.value})")

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else self._mode.value
        return f"<Synchronizer {self._label} [{state}]>"

    def __enter__(self) -> "Synchronizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def source(self):
        return self._source

    @property
    def target(self):
        return self._target

    @property
    def mode(self) -> SyncMode:
        return self._mode

    @property
    def is_relaying(self) -> bool:
        """True while a change is being applied to the opposite collection."""
        return self._relay_depth > 0

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Detach from both collections. Safe to call more than once."""
        self._source.remove_change(self._on_source_changed)
        self._target.remove_change(self._on_target_changed)
        if not self._disposed:
            self._disposed = True
            logger.info(
                f"Synchronizer {self._label} disposed after "
                f"{self.stats.total_relays} relays"
            )

    def rebuild_target(self) -> None:
        """Replace the target's contents with the image of the source.

        Use after a MappingError to bring the pair back in line.

        Raises:
            SynchronizerDisposedError: If dispose() was already called
            MappingError: If to_target fails (target left unchanged)
        """
        self._rebuild(RelayDirection.TO_TARGET)

    def rebuild_source(self) -> None:
        """Replace the source's contents with the image of the target.

        Raises:
            SynchronizerDisposedError: If dispose() was already called
            MappingError: If to_source fails (source left unchanged)
        """
        self._rebuild(RelayDirection.TO_SOURCE)

    def _rebuild(self, direction: RelayDirection) -> None:
        if self._disposed:
            raise SynchronizerDisposedError(
                f"Synchronizer {self._label} is disposed"
            )
        origin, destination, creator = self._route(direction)
        with self._relaying():
            destination.reset(self._map(list(origin), creator, direction))
        self.stats.rebuilds += 1
        logger.info(f"Rebuilt {direction.value} for {self._label}: {len(destination)} items")

    # ------------------------------------------------------------------
    # Relay
    # ------------------------------------------------------------------

    def _on_source_changed(self, sender: Any, event: ChangeEvent) -> None:
        self._relay(event, RelayDirection.TO_TARGET)

    def _on_target_changed(self, sender: Any, event: ChangeEvent) -> None:
        self._relay(event, RelayDirection.TO_SOURCE)

    def _route(self, direction: RelayDirection):
        """Return (origin, destination, creator) for a direction."""
        if direction is RelayDirection.TO_TARGET:
            return self._source, self._target, self._to_target
        return self._target, self._source, self._to_source

    @contextmanager
    def _relaying(self):
        self._relay_depth += 1
        try:
            yield
        finally:
            self._relay_depth -= 1

    def _relay(self, event: ChangeEvent, direction: RelayDirection) -> None:
        if self._relay_depth:
            # Echo of our own mirrored mutation
            self.stats.suppressed += 1
            return

        origin, destination, creator = self._route(direction)
        logger.debug(f"Relay {direction.value} on {self._label}: {event.to_dict()}")

        with self._relaying():
            self._apply(event, origin, destination, creator, direction)

        self.stats.record(direction, event.action)

    def _apply(
        self,
        event: ChangeEvent,
        origin,
        destination,
        creator: Callable[[Any], Any],
        direction: RelayDirection,
    ) -> None:
        """Replay event on destination. Items are mapped before any mutation."""
        action = event.action

        if action is ChangeAction.ADD:
            mapped = self._map(event.new_items, creator, direction)
            if self.config.add_strategy is AddStrategy.MIRROR_INDEX:
                destination.insert_range(min(event.new_index, len(destination)), mapped)
            else:
                destination.extend(mapped)

        elif action is ChangeAction.REMOVE:
            destination.remove_range(event.old_index, event.old_count)

        elif action is ChangeAction.REPLACE:
            mapped = self._map(event.new_items, creator, direction)
            destination.replace_range(event.old_index, event.old_count, mapped)

        elif action is ChangeAction.MOVE:
            # Assumes both sides are positionally aligned
            if event.old_count == 1:
                destination.move(event.old_index, event.new_index)
            else:
                destination.move_range(
                    event.old_index, event.old_count,
                    event.new_index, event.new_count,
                )

        elif action is ChangeAction.RESET:
            destination.reset(self._map(list(origin), creator, direction))

    def _map(
        self,
        items: Iterable[Any],
        creator: Callable[[Any], Any],
        direction: RelayDirection,
    ) -> List[Any]:
        """Map items eagerly, wrapping failures in MappingError."""

        def convert(item: Any) -> Any:
            try:
                return creator(item)
            except Exception as e:
                self.stats.mapping_failures += 1
                self.stats.last_error = f"{type(e).__name__}: {e}"
                logger.error(
                    f"Mapping failed relaying {direction.value} on {self._label}: "
                    f"{item!r}: {e}"
                )
                raise MappingError(direction, item, e) from e

        return list(map_range(items, convert))
