import pytest

from sectorfs.hashtable import INCREASE_SIZE_BY, INITIAL_BUCKETS, HashTable


def make_table():
    return HashTable(int, lambda key: key & 0xFFFFFFFF)


def test_find_inserted_item():
    table = make_table()
    table.insert("7")
    assert table.find(7) == "7"
    assert 7 in table
    assert len(table) == 1


def test_find_missing_returns_none():
    table = make_table()
    assert table.find(3) is None
    assert 3 not in table


def test_new_table_is_empty():
    table = make_table()
    assert table.is_empty()
    assert list(table) == []


def test_duplicate_key_rejected():
    table = make_table()
    table.insert("5")
    with pytest.raises(ValueError):
        table.insert("05")
    assert len(table) == 1


def test_remove_returns_item():
    table = make_table()
    table.insert("4")
    table.insert("9")
    assert table.remove(4) == "4"
    assert 4 not in table
    assert table.find(9) == "9"
    assert len(table) == 1


def test_remove_missing_raises_key_error():
    table = make_table()
    table.insert("1")
    with pytest.raises(KeyError):
        table.remove(2)


def test_table_grows_when_full():
    table = make_table()
    for i in range(12):
        table.insert(str(i))
    assert table.num_buckets == INITIAL_BUCKETS
    table.insert("12")
    assert table.num_buckets == INITIAL_BUCKETS * INCREASE_SIZE_BY
    assert sorted(table, key=int) == [str(i) for i in range(13)]


def test_everything_comes_back_out_after_rehash():
    table = make_table()
    values = [str(i) for i in range(15)]
    for value in values:
        table.insert(value)
    table.sanity_check()
    removed = [table.remove(int(value)) for value in values]
    assert removed == values
    assert table.is_empty()


def test_iteration_visits_buckets_in_order():
    table = make_table()
    for value in ["3", "1", "2", "0"]:
        table.insert(value)
    assert list(table) == ["0", "1", "2", "3"]


def test_apply_visits_every_item():
    table = make_table()
    for value in ["10", "20", "30"]:
        table.insert(value)
    seen = []
    table.apply(seen.append)
    assert sorted(seen) == ["10", "20", "30"]


def test_sanity_check_detects_items_in_wrong_bucket():
    offset = [0]
    table = HashTable(int, lambda key: key + offset[0])
    for value in ["0", "1", "2"]:
        table.insert(value)
    offset[0] = 1
    with pytest.raises(RuntimeError):
        table.sanity_check()


def test_items_with_colliding_hashes_are_kept_apart():
    table = HashTable(int, lambda key: 0)
    for value in ["1", "2", "3"]:
        table.insert(value)
    assert table.find(2) == "2"
    assert table.remove(1) == "1"
    assert list(table) == ["2", "3"]