"""Change events emitted by observable collections.

A ChangeEvent describes one structural mutation precisely enough for a
Synchronizer to replay it on a second collection of a different element
type. Indices and counts always refer to the collection as it was before
the mutation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from collection_sync.errors import InvalidArgumentError


class ChangeAction(Enum):
    """Kind of structural mutation."""
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    RESET = "reset"


def _non_negative(name: str, value: int) -> int:
    if value < 0:
        raise InvalidArgumentError(name, f"{name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class ChangeEvent:
    """Immutable record of a single mutation.

    Build instances through the factory classmethods rather than directly.

    Attributes:
        action: What happened
        old_index: Start of the affected span before the change (-1 if unused)
        old_count: Elements removed or moved away
        old_items: Removed elements, when the emitter knows them
        new_index: Start of the affected span after the change (-1 if unused)
        new_count: Elements inserted or moved in
        new_items: Inserted elements
    """
    action: ChangeAction
    old_index: int = -1
    old_count: int = 0
    old_items: Tuple[Any, ...] = ()
    new_index: int = -1
    new_count: int = 0
    new_items: Tuple[Any, ...] = ()

    @classmethod
    def add(cls, index: int, items: Iterable[Any]) -> "ChangeEvent":
        """Items were inserted starting at index."""
        items = tuple(items)
        return cls(
            ChangeAction.ADD,
            new_index=_non_negative("index", index),
            new_count=len(items),
            new_items=items,
        )

    @classmethod
    def remove(cls, index: int, count: int, old_items: Iterable[Any] = ()) -> "ChangeEvent":
        """count items were removed starting at index."""
        return cls(
            ChangeAction.REMOVE,
            old_index=_non_negative("index", index),
            old_count=_non_negative("count", count),
            old_items=tuple(old_items),
        )

    @classmethod
    def replace(
        cls,
        index: int,
        removed_count: int,
        items: Iterable[Any],
        old_items: Iterable[Any] = (),
    ) -> "ChangeEvent":
        """removed_count items at index were replaced by items."""
        items = tuple(items)
        _non_negative("index", index)
        return cls(
            ChangeAction.REPLACE,
            old_index=index,
            old_count=_non_negative("removed_count", removed_count),
            old_items=tuple(old_items),
            new_index=index,
            new_count=len(items),
            new_items=items,
        )

    @classmethod
    def move(
        cls,
        old_index: int,
        old_count: int,
        new_index: int,
        new_count: Optional[int] = None,
    ) -> "ChangeEvent":
        """A contiguous span moved from old_index to new_index."""
        if new_count is None:
            new_count = old_count
        return cls(
            ChangeAction.MOVE,
            old_index=_non_negative("old_index", old_index),
            old_count=_non_negative("old_count", old_count),
            new_index=_non_negative("new_index", new_index),
            new_count=_non_negative("new_count", new_count),
        )

    @classmethod
    def reset(cls) -> "ChangeEvent":
        """Contents changed wholesale; observers should rebuild."""
        return cls(ChangeAction.RESET)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (items omitted)."""
        return {
            "action": self.action.value,
            "old_index": self.old_index,
            "old_count": self.old_count,
            "new_index": self.new_index,
            "new_count": self.new_count,
        }
