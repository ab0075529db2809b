import pytest

from sectorfs.bitmap import Bitmap
from sectorfs.directory import Directory, DirectoryEntry, directory_entry_size
from sectorfs.filehdr import FileHeader, NoSpaceError
from sectorfs.openfile import OpenFile
from sectorfs.synchdisk import SynchDisk


def test_entry_size_matches_struct_layout():
    assert directory_entry_size() == 20


def test_add_and_find():
    d = Directory(4)
    d.add("alpha", 5)
    d.add("beta", 7)
    assert d.find("alpha") == 5
    assert d.find("beta") == 7
    assert d.find("gamma") is None


def test_duplicate_name_raises():
    d = Directory(4)
    d.add("same", 1)
    with pytest.raises(FileExistsError):
        d.add("same", 2)
    assert d.find("same") == 1


def test_full_directory_raises():
    d = Directory(2)
    d.add("a", 1)
    d.add("b", 2)
    with pytest.raises(NoSpaceError):
        d.add("c", 3)
    assert d.names() == ["a", "b"]


def test_remove_frees_slot():
    d = Directory(1)
    d.add("a", 1)
    d.remove("a")
    assert d.find("a") is None
    d.add("b", 2)
    assert d.names() == ["b"]


def test_remove_missing_raises():
    d = Directory(2)
    with pytest.raises(FileNotFoundError):
        d.remove("nothing")


def test_long_names_are_truncated():
    d = Directory(2)
    d.add("abcdefghijkl", 3)
    assert d.names() == ["abcdefghi"]
    assert d.find("abcdefghi") == 3
    assert d.find("abcdefghiXYZ") == 3
    assert d.find("abcdefgh") is None


def test_entry_bytes_round_trip():
    entry = DirectoryEntry(in_use=True, sector=42, name="file")
    raw = entry.to_bytes()
    assert len(raw) == directory_entry_size()
    assert DirectoryEntry.from_bytes(raw) == entry


def _disk_with_file(size):
    disk = SynchDisk(64, 128)
    free_map = Bitmap(64)
    free_map.mark(0)
    header = FileHeader(disk)
    header.allocate(free_map, size)
    header.write_back(0)
    return disk, free_map, OpenFile(disk, 0)


def test_write_back_fetch_from_round_trip():
    d = Directory(5)
    disk, _, f = _disk_with_file(d.storage_size)
    d.add("one", 10)
    d.add("two", 11)
    d.add("three", 12)
    d.remove("two")
    d.write_back(f)

    loaded = Directory(5)
    loaded.fetch_from(f)
    assert loaded.names() == ["one", "three"]
    assert loaded.find("three") == 12
    assert loaded.find("two") is None


def test_dump_lists_files_with_headers():
    disk, free_map, _ = _disk_with_file(10)
    header = FileHeader(disk)
    header.allocate(free_map, 4)
    header.write_back(9)
    d = Directory(3)
    d.add("doc", 9)
    text = d.dump(disk)
    assert text.startswith("Directory contents:\n")
    assert "Name: doc, Sector: 9\n" in text
    assert "File size: 4." in text


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Directory(-1)