"""Abstract base class for observable ordered collections.

This module defines the interface a collection must implement to take part
in synchronization: change-handler subscription plus the range mutations a
Synchronizer replays. Concrete collections subclass ObservableSequence and
call ``_notify`` once after every structural mutation.
"""

from abc import abstractmethod
from collections.abc import MutableSequence
from typing import Any, Callable, Iterable, List, Optional
import logging

from ..events import ChangeEvent


ChangeHandler = Callable[[Any, ChangeEvent], None]


class ObservableSequence(MutableSequence):
    """Mutable sequence that reports every structural change.

    Handlers are invoked synchronously as ``handler(sender, event)`` after
    the mutation is visible, in subscription order. An exception raised by a
    handler propagates to the caller that mutated the collection.

    Example:
        class MyList(ObservableSequence):
            def remove_range(self, index, count):
                removed = self._data[index:index + count]
                del self._data[index:index + count]
                self._notify(ChangeEvent.remove(index, count, removed))
            # ... implement the other abstract methods
    """

    def __init__(self):
        """Initialize handler bookkeeping and a logger."""
        self._handlers: List[ChangeHandler] = []
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ------------------------------------------------------------------
    # Change subscription
    # ------------------------------------------------------------------

    def on_change(self, handler: ChangeHandler) -> None:
        """Subscribe handler to change events.

        Args:
            handler: Callable receiving (sender, event)
        """
        self._handlers.append(handler)

    def remove_change(self, handler: ChangeHandler) -> None:
        """Unsubscribe handler. Does nothing if it was never subscribed.

        Args:
            handler: Previously subscribed callable
        """
        if handler in self._handlers:
            self._handlers.remove(handler)

    def has_handler(self, handler: ChangeHandler) -> bool:
        """Check whether handler is currently subscribed."""
        return handler in self._handlers

    @property
    def handler_count(self) -> int:
        """Number of subscribed handlers."""
        return len(self._handlers)

    def _notify(self, event: ChangeEvent) -> None:
        """Deliver event to a snapshot of the current handlers."""
        self.logger.debug(f"Change: {event.to_dict()}")
        for handler in list(self._handlers):
            handler(self, event)

    # ------------------------------------------------------------------
    # Range mutations
    # ------------------------------------------------------------------

    @abstractmethod
    def insert_range(self, index: int, items: Iterable[Any]) -> None:
        """Insert items starting at index (0 <= index <= len).

        Emits one ADD event. Inserting nothing emits nothing.

        Args:
            index: Insertion point
            items: Items to insert, in order
        """
        pass

    @abstractmethod
    def remove_range(self, index: int, count: int) -> None:
        """Remove count items starting at index.

        Emits one REMOVE event. Removing nothing emits nothing.

        Args:
            index: First position to remove
            count: Number of items to remove
        """
        pass

    @abstractmethod
    def replace_range(self, index: int, removed_count: int, items: Iterable[Any]) -> None:
        """Replace removed_count items at index with items.

        Emits one REPLACE event.

        Args:
            index: First position to replace
            removed_count: Number of existing items to drop
            items: Items inserted at index
        """
        pass

    @abstractmethod
    def move_range(
        self,
        old_index: int,
        old_count: int,
        new_index: int,
        new_count: Optional[int] = None,
    ) -> None:
        """Move a contiguous span to a new position.

        The span is removed first; new_index is the position it occupies
        afterwards. Emits one MOVE event.

        Args:
            old_index: Current start of the span
            old_count: Length of the span
            new_index: Start of the span after the move
            new_count: Length after the move (defaults to old_count)
        """
        pass

    @abstractmethod
    def reset(self, items: Iterable[Any] = ()) -> None:
        """Replace the whole contents with items, emitting one RESET.

        Args:
            items: New contents
        """
        pass

    # ------------------------------------------------------------------
    # Conveniences built on the range mutations
    # ------------------------------------------------------------------

    def extend(self, items: Iterable[Any]) -> None:
        """Append items at the end as a single ADD."""
        if items is self:
            items = list(items)
        self.insert_range(len(self), items)

    def append(self, item: Any) -> None:
        """Append one item."""
        self.insert_range(len(self), (item,))

    def move(self, old_index: int, new_index: int) -> None:
        """Move one element from old_index to new_index."""
        self.move_range(old_index, 1, new_index, 1)

    def clear(self) -> None:
        """Remove everything, emitting RESET."""
        self.reset(())

    def snapshot(self) -> List[Any]:
        """Return a point-in-time copy of the contents."""
        return list(self)
