"""Configuration dataclasses for Collection Sync."""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


class SyncMode(Enum):
    """Which direction(s) a Synchronizer relays changes in."""
    ONE_WAY_TO_TARGET = "one_way_to_target"   # source -> target only
    ONE_WAY_TO_SOURCE = "one_way_to_source"   # target -> source only
    TWO_WAY = "two_way"

    @property
    def relays_to_target(self) -> bool:
        """True if source mutations are mirrored into the target."""
        return self in (SyncMode.ONE_WAY_TO_TARGET, SyncMode.TWO_WAY)

    @property
    def relays_to_source(self) -> bool:
        """True if target mutations are mirrored into the source."""
        return self in (SyncMode.ONE_WAY_TO_SOURCE, SyncMode.TWO_WAY)


class AddStrategy(Enum):
    """Where relayed additions land in the opposite collection."""
    APPEND = "append"               # Always at the end
    MIRROR_INDEX = "mirror_index"   # At the index the insert happened at


@dataclass
class SyncConfig:
    """Configuration for a single Synchronizer.

    Attributes:
        mode: Relay direction(s)
        add_strategy: Placement of relayed additions
        name: Optional label used in log messages
    """
    mode: SyncMode = SyncMode.TWO_WAY
    add_strategy: AddStrategy = AddStrategy.APPEND
    name: Optional[str] = None

    def __post_init__(self):
        """Ensure enum fields are enum members."""
        if isinstance(self.mode, str):
            self.mode = SyncMode(self.mode.lower())
        if isinstance(self.add_strategy, str):
            self.add_strategy = AddStrategy(self.add_strategy.lower())
