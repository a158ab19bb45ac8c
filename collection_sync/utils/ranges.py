"""Sequence range helpers for Collection Sync.

Bounds checks and span copying for range operations, plus the lazy
element mapping the Synchronizer relays through.
"""

from typing import Any, Callable, Iterable, Iterator, List, Sequence, Tuple


def map_range(items: Iterable[Any], creator: Callable[[Any], Any]) -> Iterator[Any]:
    """Lazily map each item through creator.

    Args:
        items: Items to map (None is treated as empty)
        creator: Function applied to every item

    Yields:
        creator(item) for each item in order
    """
    if items is None:
        return
    for item in items:
        yield creator(item)


def check_index(index: int, length: int, allow_end: bool = False) -> None:
    """Raise IndexError unless 0 <= index < length.

    Args:
        index: Position to check
        length: Current sequence length
        allow_end: Also accept index == length (insertion point)
    """
    upper = length if allow_end else length - 1
    if index < 0 or index > upper:
        raise IndexError(f"index {index} out of range for length {length}")


def check_range(index: int, count: int, length: int) -> None:
    """Raise IndexError unless [index, index + count) lies within length.

    Args:
        index: First position of the span
        count: Number of elements in the span
        length: Current sequence length
    """
    if count < 0:
        raise IndexError(f"count {count} must not be negative")
    if index < 0 or index + count > length:
        raise IndexError(
            f"range [{index}, {index + count}) out of bounds for length {length}"
        )


def take_span(items: Sequence[Any], index: int, count: int) -> List[Any]:
    """Copy the contiguous span items[index:index + count].

    Args:
        items: Sequence to read from
        index: First position of the span
        count: Number of elements to copy

    Returns:
        New list with the span's elements
    """
    return list(items[index:index + count])


def slice_bounds(key: slice, length: int) -> Tuple[int, int]:
    """Resolve a contiguous slice to (start, count).

    Args:
        key: Slice object
        length: Current sequence length

    Returns:
        (start, count) tuple

    Raises:
        ValueError: If the slice has a step other than 1
    """
    start, stop, step = key.indices(length)
    if step != 1:
        raise ValueError("extended slices are not supported")
    return start, max(0, stop - start)
