"""Ordered collections of distinct items: a plain list and a sorted list."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class LinkedList(Generic[T]):
    """A sequence of distinct items that can grow at either end.

    An item may appear at most once; adding one that is already present
    raises ``ValueError``.
    """

    def __init__(self) -> None:
        self._items: list[T] = []

    def __contains__(self, item: object) -> bool:
        return any(item == present for present in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def _check_absent(self, item: T) -> None:
        if item in self:
            raise ValueError(f"{item!r} is already in the list")

    def prepend(self, item: T) -> None:
        """Put ``item`` at the front of the list."""
        self._check_absent(item)
        self._items.insert(0, item)

    def append(self, item: T) -> None:
        """Put ``item`` at the end of the list."""
        self._check_absent(item)
        self._items.append(item)

    def front(self) -> T:
        """Return the first item without removing it."""
        if not self._items:
            raise IndexError("front of an empty list")
        return self._items[0]

    def remove_front(self) -> T:
        """Remove and return the first item."""
        if not self._items:
            raise IndexError("remove_front from an empty list")
        return self._items.pop(0)

    def remove(self, item: T) -> None:
        """Remove ``item``, which must be in the list."""
        for index, present in enumerate(self._items):
            if item == present:
                del self._items[index]
                return
        raise ValueError(f"{item!r} is not in the list")

    def is_empty(self) -> bool:
        """Return True if the list holds no items."""
        return not self._items

    def apply(self, func: Callable[[T], Any]) -> None:
        """Call ``func`` on every item, front to back."""
        for item in list(self._items):
            func(item)

    def sanity_check(self) -> None:
        """Raise ``RuntimeError`` if the list no longer holds distinct items."""
        seen: list[T] = []
        for item in self._items:
            if any(item == other for other in seen):
                raise RuntimeError(f"list corrupted: {item!r} appears twice")
            seen.append(item)


class SortedList(LinkedList[T]):
    """A list kept in increasing order under a three-way comparison.

    ``compare(x, y)`` returns a negative number if ``x < y``, zero if they
    are equal and a positive number if ``x > y``.  Items that compare equal
    keep the order in which they were inserted.
    """

    def __init__(self, compare: Callable[[T, T], int]) -> None:
        super().__init__()
        self._compare = compare

    def insert(self, item: T) -> None:
        """Insert ``item`` before the first item that is greater than it."""
        self._check_absent(item)
        position = next(
            (
                index
                for index, present in enumerate(self._items)
                if self._compare(item, present) < 0
            ),
            len(self._items),
        )
        self._items.insert(position, item)

    def prepend(self, item: T) -> None:
        """Insert ``item`` in sorted order; a sorted list has no front to add to."""
        self.insert(item)

    def append(self, item: T) -> None:
        """Insert ``item`` in sorted order; a sorted list has no end to add to."""
        self.insert(item)

    def sanity_check(self) -> None:
        """Raise ``RuntimeError`` if the items are repeated or out of order."""
        super().sanity_check()
        for earlier, later in zip(self._items, self._items[1:]):
            if self._compare(earlier, later) > 0:
                raise RuntimeError(
                    f"sorted list out of order: {earlier!r} before {later!r}"
                )