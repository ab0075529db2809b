"""A self-expanding hash table of items that each carry their own key."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

from sectorfs.linkedlist import LinkedList

K = TypeVar("K")
T = TypeVar("T")

INITIAL_BUCKETS = 4
RESIZE_RATIO = 3
INCREASE_SIZE_BY = 4

_MISSING = object()


class HashTable(Generic[K, T]):
    """Items looked up by key, using chaining to resolve collisions.

    ``get_key(item)`` gives the key of an item and ``hash_func(key)`` a
    non-negative integer for a key.  The number of buckets starts at four
    and grows fourfold whenever the table holds three items per bucket.
    """

    def __init__(self, get_key: Callable[[T], K], hash_func: Callable[[K], int]) -> None:
        self._get_key = get_key
        self._hash = hash_func
        self._count = 0
        self._buckets: list[LinkedList[T]] = self._new_buckets(INITIAL_BUCKETS)

    @staticmethod
    def _new_buckets(size: int) -> list[LinkedList[T]]:
        return [LinkedList() for _ in range(size)]

    @property
    def num_buckets(self) -> int:
        """The number of buckets currently in use."""
        return len(self._buckets)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        return self._lookup(key) is not _MISSING

    def __iter__(self) -> Iterator[T]:
        items = [item for bucket in self._buckets for item in bucket]
        return iter(items)

    def _bucket_index(self, key: Any) -> int:
        return self._hash(key) % len(self._buckets)

    def _lookup(self, key: Any) -> Any:
        bucket = self._buckets[self._bucket_index(key)]
        return next(
            (item for item in bucket if self._get_key(item) == key), _MISSING
        )

    def _rehash(self) -> None:
        self.sanity_check()
        old = self._buckets
        self._buckets = self._new_buckets(len(old) * INCREASE_SIZE_BY)
        for bucket in old:
            while not bucket.is_empty():
                item = bucket.remove_front()
                self._buckets[self._bucket_index(self._get_key(item))].append(item)
        self.sanity_check()

    def insert(self, item: T) -> None:
        """Put ``item`` into the table; its key must not be present yet."""
        key = self._get_key(item)
        if key in self:
            raise ValueError(f"key {key!r} is already in the table")
        if self._count // len(self._buckets) >= RESIZE_RATIO:
            self._rehash()
        self._buckets[self._bucket_index(key)].append(item)
        self._count += 1

    def remove(self, key: K) -> T:
        """Remove and return the item with ``key``; raise ``KeyError`` if absent."""
        bucket = self._buckets[self._bucket_index(key)]
        item = self._lookup(key)
        if item is _MISSING:
            raise KeyError(key)
        bucket.remove(item)
        self._count -= 1
        return item

    def find(self, key: K) -> T | None:
        """Return the item with ``key``, or None if there is none."""
        item = self._lookup(key)
        return None if item is _MISSING else item

    def is_empty(self) -> bool:
        """Return True if the table holds no items."""
        return self._count == 0

    def apply(self, func: Callable[[T], Any]) -> None:
        """Call ``func`` on every item, bucket by bucket."""
        for bucket in self._buckets:
            bucket.apply(func)

    def sanity_check(self) -> None:
        """Raise ``RuntimeError`` if the table's structure has been corrupted."""
        found = 0
        for index, bucket in enumerate(self._buckets):
            bucket.sanity_check()
            found += len(bucket)
            for item in bucket:
                if self._bucket_index(self._get_key(item)) != index:
                    raise RuntimeError(
                        f"item {item!r} is stored in bucket {index} "
                        "but does not hash there"
                    )
        if found != self._count:
            raise RuntimeError(
                f"table claims {self._count} items but holds {found}"
            )