import errno

import pytest

from sectorfs.hostfs import MAX_OPEN_FILES, HostFileSystem, HostOpenFile


@pytest.fixture
def hostfs():
    return HostFileSystem()


@pytest.fixture
def path(tmp_path):
    return str(tmp_path / "file.bin")


def test_create_makes_empty_file(hostfs, path):
    hostfs.create(path)
    with hostfs.open(path) as handle:
        assert handle.length() == 0


def test_create_truncates(hostfs, path):
    hostfs.create(path)
    with hostfs.open(path) as handle:
        handle.write(b"content")
    hostfs.create(path)
    with hostfs.open(path) as handle:
        assert handle.length() == 0


def test_open_missing_raises(hostfs, tmp_path):
    with pytest.raises(FileNotFoundError):
        hostfs.open(str(tmp_path / "missing"))


def test_open_file_read_write_positions(path):
    with open(path, "wb"):
        pass
    with HostOpenFile(path) as handle:
        assert handle.write(b"hello world") == 11
        assert handle.position == 11
        assert handle.read_at(5, 6) == b"world"
        assert handle.position == 11
        assert handle.length() == 11


def test_sequential_reads_advance(path):
    with open(path, "wb") as raw:
        raw.write(b"abcdef")
    with HostOpenFile(path) as handle:
        assert handle.read(2) == b"ab"
        assert handle.read(2) == b"cd"
        assert handle.read(10) == b"ef"
        assert handle.read(1) == b""


def test_write_at_does_not_move_position(path):
    with open(path, "wb") as raw:
        raw.write(b"xxxx")
    with HostOpenFile(path) as handle:
        handle.write_at(b"yy", 1)
        assert handle.position == 0
        assert handle.read(4) == b"xyyx"


def test_table_round_trip(hostfs, path):
    hostfs.create(path)
    file_id = hostfs.open_a_file(path)
    assert file_id == 0
    assert hostfs.write_a_file(b"payload", file_id) == 7
    hostfs.close_a_file(file_id)
    reader = hostfs.open_a_file(path)
    assert hostfs.read_a_file(100, reader) == b"payload"
    hostfs.close_a_file(reader)


def test_read_at_end_raises(hostfs, path):
    hostfs.create(path)
    file_id = hostfs.open_a_file(path)
    with pytest.raises(EOFError):
        hostfs.read_a_file(10, file_id)
    hostfs.close_a_file(file_id)


def test_write_nothing_raises(hostfs, path):
    hostfs.create(path)
    file_id = hostfs.open_a_file(path)
    with pytest.raises(ValueError):
        hostfs.write_a_file(b"", file_id)
    hostfs.close_a_file(file_id)


def test_table_fills_up(hostfs, path):
    hostfs.create(path)
    ids = [hostfs.open_a_file(path) for _ in range(MAX_OPEN_FILES)]
    assert ids == list(range(MAX_OPEN_FILES))
    with pytest.raises(OSError) as info:
        hostfs.open_a_file(path)
    assert info.value.errno == errno.EMFILE
    hostfs.close_a_file(5)
    assert hostfs.open_a_file(path) == 5
    for file_id in ids:
        hostfs.close_a_file(file_id)


@pytest.mark.parametrize("bad_id", [-1, MAX_OPEN_FILES, 3])
def test_bad_ids_raise(hostfs, bad_id):
    with pytest.raises(OSError) as info:
        hostfs.read_a_file(1, bad_id)
    assert info.value.errno == errno.EBADF
    with pytest.raises(OSError):
        hostfs.close_a_file(bad_id)


def test_closed_id_is_invalid(hostfs, path):
    hostfs.create(path)
    file_id = hostfs.open_a_file(path)
    hostfs.close_a_file(file_id)
    assert hostfs.open_files[file_id] is None
    with pytest.raises(OSError):
        hostfs.write_a_file(b"x", file_id)


def test_open_a_missing_file_keeps_slot_free(hostfs, tmp_path):
    with pytest.raises(FileNotFoundError):
        hostfs.open_a_file(str(tmp_path / "missing"))
    assert hostfs.open_files == [None] * MAX_OPEN_FILES


def test_remove(hostfs, path):
    hostfs.create(path)
    hostfs.remove(path)
    with pytest.raises(FileNotFoundError):
        hostfs.open(path)
    with pytest.raises(FileNotFoundError):
        hostfs.remove(path)