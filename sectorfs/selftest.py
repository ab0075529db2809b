"""Self-tests for the bitmap, list, sorted list and hash table."""

from __future__ import annotations

from typing import Sequence, TypeVar

from sectorfs.bitmap import BITS_IN_WORD, Bitmap
from sectorfs.hashtable import HashTable
from sectorfs.linkedlist import LinkedList, SortedList

T = TypeVar("T")

LIST_TEST_VECTOR = (9, 5, 7)
# Enough entries to force the hash table to grow.
HASH_TEST_VECTOR = tuple(str(i) for i in range(15))


class SelfTestError(AssertionError):
    """A self-test found a structure behaving wrongly."""


def _check(condition: bool, what: str) -> None:
    if not condition:
        raise SelfTestError(what)


def int_compare(x: int, y: int) -> int:
    """Three-way comparison of two integers: -1, 0 or 1."""
    if x < y:
        return -1
    if x == y:
        return 0
    return 1


def _hash_int(key: int) -> int:
    return key & 0xFFFFFFFF


def _hash_key(text: str) -> int:
    return int(text)


def _bitmap_self_test(bits: Bitmap) -> None:
    _check(len(bits) >= BITS_IN_WORD, "bitmap must be big enough")
    _check(bits.num_clear() == len(bits), "bitmap must start empty")
    _check(bits.find_and_set() == 0, "first free bit should be 0")
    bits.mark(31)
    _check(bits.test(0) and bits.test(31), "marked bits should be set")
    _check(bits.find_and_set() == 1, "next free bit should be 1")
    for which in (0, 1, 31):
        bits.clear(which)
    for which in range(len(bits)):
        bits.mark(which)
    _check(bits.find_and_set() is None, "bitmap should be full")
    for which in range(len(bits)):
        bits.clear(which)


def _list_self_test(items: LinkedList[T], entries: Sequence[T]) -> None:
    items.sanity_check()
    _check(items.is_empty() and len(items) == 0, "list must start empty")
    _check(not list(items), "iterating an empty list must yield nothing")
    for entry in entries:
        items.append(entry)
        _check(entry in items, f"{entry!r} should be in the list")
        _check(not items.is_empty(), "list should not be empty")
    items.sanity_check()
    for entry in entries:
        items.remove(entry)
        _check(entry not in items, f"{entry!r} should be gone")
    _check(items.is_empty(), "list should be empty again")
    items.sanity_check()


def _sorted_list_self_test(items: SortedList[T], entries: Sequence[T]) -> None:
    _list_self_test(items, entries)
    for entry in entries:
        items.insert(entry)
        _check(entry in items, f"{entry!r} should be in the sorted list")
    items.sanity_check()
    taken = []
    for _ in entries:
        entry = items.remove_front()
        _check(entry not in items, f"{entry!r} should be gone")
        taken.append(entry)
    _check(items.is_empty(), "sorted list should be empty again")
    for earlier, later in zip(taken, taken[1:]):
        _check(items._compare(earlier, later) <= 0, "items came out of order")
    items.sanity_check()


def _hash_table_self_test(table: HashTable, entries: Sequence) -> None:
    table.sanity_check()
    _check(table.is_empty(), "table must start empty")
    _check(not list(table), "iterating an empty table must yield nothing")
    for entry in entries:
        table.insert(entry)
        _check(table._get_key(entry) in table, f"{entry!r} should be in the table")
        _check(not table.is_empty(), "table should not be empty")
    for entry in entries:
        _check(
            table.remove(table._get_key(entry)) == entry,
            f"removing {entry!r} should give it back",
        )
    _check(table.is_empty(), "table should be empty again")
    table.sanity_check()


def lib_self_test() -> list[str]:
    """Run the self-tests and return the names of the structures that passed.

    Raises ``SelfTestError`` at the first check that fails.
    """
    _bitmap_self_test(Bitmap(200))
    _list_self_test(LinkedList(), LIST_TEST_VECTOR)
    _sorted_list_self_test(SortedList(int_compare), LIST_TEST_VECTOR)
    _hash_table_self_test(HashTable(_hash_key, _hash_int), HASH_TEST_VECTOR)
    return ["bitmap", "list", "sorted list", "hash table"]