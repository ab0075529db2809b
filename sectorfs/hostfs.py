"""Files kept directly in the host's file system, with a small open-file table."""

from __future__ import annotations

import errno
import os
from typing import BinaryIO

MAX_OPEN_FILES = 20


class HostOpenFile:
    """A host file opened for reading and writing, with its own position."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO = open(path, "r+b")
        self.position = 0

    def __enter__(self) -> "HostOpenFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read_at(self, num_bytes: int, position: int) -> bytes:
        """Read up to ``num_bytes`` starting at ``position``."""
        self._file.seek(position)
        return self._file.read(max(num_bytes, 0))

    def write_at(self, data: bytes, position: int) -> int:
        """Write ``data`` starting at ``position`` and return its length."""
        self._file.seek(position)
        self._file.write(data)
        self._file.flush()
        return len(data)

    def read(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes`` from the current position and advance it."""
        data = self.read_at(num_bytes, self.position)
        self.position += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write ``data`` at the current position and advance it."""
        written = self.write_at(data, self.position)
        self.position += written
        return written

    def length(self) -> int:
        """Return the size of the file in bytes."""
        return self._file.seek(0, os.SEEK_END)

    def close(self) -> None:
        """Close the underlying host file."""
        self._file.close()


class HostFileSystem:
    """File operations on host files, with a table of up to 20 open files.

    Files in the table are named by their slot number, the lowest free one
    being used first.
    """

    def __init__(self) -> None:
        self.open_files: list[HostOpenFile | None] = [None] * MAX_OPEN_FILES

    def create(self, name: str) -> None:
        """Create ``name`` empty, truncating it if it already exists."""
        with open(name, "wb"):
            pass

    def open(self, name: str) -> HostOpenFile:
        """Open ``name``; raise ``FileNotFoundError`` if it does not exist."""
        return HostOpenFile(name)

    def _lookup(self, file_id: int) -> HostOpenFile:
        handle = self.open_files[file_id] if 0 <= file_id < MAX_OPEN_FILES else None
        if handle is None:
            raise OSError(errno.EBADF, f"no open file with id {file_id}")
        return handle

    def open_a_file(self, name: str) -> int:
        """Open ``name`` into the table and return its id.

        Raises ``OSError`` with ``EMFILE`` if the table is full and
        ``FileNotFoundError`` if the file does not exist.
        """
        file_id = next(
            (index for index, slot in enumerate(self.open_files) if slot is None),
            None,
        )
        if file_id is None:
            raise OSError(errno.EMFILE, "too many open files")
        self.open_files[file_id] = self.open(name)
        return file_id

    def read_a_file(self, size: int, file_id: int) -> bytes:
        """Read up to ``size`` bytes from open file ``file_id``.

        Raises ``EOFError`` if nothing could be read.
        """
        data = self._lookup(file_id).read(size)
        if not data:
            raise EOFError(f"nothing read from file {file_id}")
        return data

    def write_a_file(self, data: bytes, file_id: int) -> int:
        """Write ``data`` to open file ``file_id`` and return how many bytes went out."""
        handle = self._lookup(file_id)
        if not data:
            raise ValueError("nothing to write")
        return handle.write(data)

    def close_a_file(self, file_id: int) -> None:
        """Close open file ``file_id`` and free its slot."""
        self._lookup(file_id).close()
        self.open_files[file_id] = None

    def remove(self, name: str) -> None:
        """Delete ``name`` from the host; raise ``FileNotFoundError`` if absent."""
        os.remove(name)