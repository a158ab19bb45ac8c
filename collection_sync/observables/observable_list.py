"""List-backed observable collection."""

from typing import Any, Iterable, List, Optional

from ..events import ChangeEvent
from ..utils.ranges import check_index, check_range, slice_bounds, take_span
from .base import ObservableSequence


class ObservableList(ObservableSequence):
    """In-memory ObservableSequence backed by a plain list.

    Every structural mutation emits exactly one ChangeEvent. Bounds are
    checked before anything changes, so a failed call leaves the list and
    its observers untouched.

    Example:
        people = ObservableList(["ada", "grace"])
        people.on_change(lambda sender, event: print(event.action))
        people.append("linus")   # prints ChangeAction.ADD
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        """Initialize with optional starting contents (no event is emitted).

        Args:
            items: Initial elements
        """
        super().__init__()
        self._data: List[Any] = list(items) if items is not None else []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ObservableList):
            return self._data == other._data
        if isinstance(other, list):
            return self._data == other
        return NotImplemented

    __hash__ = None

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __contains__(self, item: Any) -> bool:
        return item in self._data

    def __getitem__(self, key):
        # Slices come back as plain lists
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, slice):
            start, count = slice_bounds(key, len(self._data))
            self.replace_range(start, count, value)
            return
        index = self._normalize(key)
        self.replace_range(index, 1, (value,))

    def __delitem__(self, key) -> None:
        if isinstance(key, slice):
            start, count = slice_bounds(key, len(self._data))
            self.remove_range(start, count)
            return
        self.remove_range(self._normalize(key), 1)

    def _normalize(self, index: int) -> int:
        """Resolve a possibly negative index, raising IndexError if invalid."""
        if index < 0:
            index += len(self._data)
        check_index(index, len(self._data))
        return index

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, index: int, item: Any) -> None:
        """Insert one item, clamping index the way list.insert does."""
        length = len(self._data)
        if index < 0:
            index = max(0, index + length)
        self.insert_range(min(index, length), (item,))

    def insert_range(self, index: int, items: Iterable[Any]) -> None:
        items = list(items)
        check_index(index, len(self._data), allow_end=True)
        if not items:
            return
        self._data[index:index] = items
        self._notify(ChangeEvent.add(index, items))

    def remove_range(self, index: int, count: int) -> None:
        check_range(index, count, len(self._data))
        if count == 0:
            return
        removed = take_span(self._data, index, count)
        del self._data[index:index + count]
        self._notify(ChangeEvent.remove(index, count, removed))

    def replace_range(self, index: int, removed_count: int, items: Iterable[Any]) -> None:
        items = list(items)
        check_range(index, removed_count, len(self._data))
        if removed_count == 0 and not items:
            return
        removed = take_span(self._data, index, removed_count)
        self._data[index:index + removed_count] = items
        self._notify(ChangeEvent.replace(index, removed_count, items, removed))

    def move_range(
        self,
        old_index: int,
        old_count: int,
        new_index: int,
        new_count: Optional[int] = None,
    ) -> None:
        if new_count is None:
            new_count = old_count
        length = len(self._data)
        check_range(old_index, old_count, length)
        # After removal the span must fit back in at new_index
        check_range(new_index, old_count, length)
        if old_count == 0 or old_index == new_index:
            return
        span = take_span(self._data, old_index, old_count)
        del self._data[old_index:old_index + old_count]
        self._data[new_index:new_index] = span
        self._notify(ChangeEvent.move(old_index, old_count, new_index, new_count))

    def reset(self, items: Iterable[Any] = ()) -> None:
        self._data = list(items)
        self._notify(ChangeEvent.reset())

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def index(self, value: Any, start: int = 0, stop: Optional[int] = None) -> int:
        if stop is None:
            return self._data.index(value, start)
        return self._data.index(value, start, stop)

    def count(self, value: Any) -> int:
        return self._data.count(value)

    def snapshot(self) -> List[Any]:
        return list(self._data)
