"""A flat directory: a fixed-size table of file names and header sectors."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Iterator

from sectorfs.filehdr import FileHeader, NoSpaceError
from sectorfs.synchdisk import SynchDisk

FILE_NAME_MAX_LEN = 9

# in-use flag, alignment padding, header sector, name with its terminator, tail padding
_ENTRY = struct.Struct(f"<?3xi{FILE_NAME_MAX_LEN + 1}s2x")


def directory_entry_size() -> int:
    """Number of bytes one directory entry takes up on disk."""
    return _ENTRY.size


def _normalize(name: str) -> str:
    """Cut ``name`` at a NUL and to the longest name a directory stores."""
    raw = name.split("\0", 1)[0].encode("utf-8")[:FILE_NAME_MAX_LEN]
    return raw.decode("utf-8", errors="ignore")


@dataclass
class DirectoryEntry:
    """One slot of a directory: whether it is used, the name and the header sector."""

    in_use: bool = False
    sector: int = 0
    name: str = ""

    def to_bytes(self) -> bytes:
        return _ENTRY.pack(self.in_use, self.sector, self.name.encode("utf-8"))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "DirectoryEntry":
        in_use, sector, name = _ENTRY.unpack(raw)
        text = name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(in_use=in_use, sector=sector, name=text)


class Directory:
    """A table of ``size`` entries mapping file names to header sectors.

    Names longer than nine bytes are cut short, both when added and when
    looked up.  The table never grows.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("directory size cannot be negative")
        self._table = [DirectoryEntry() for _ in range(size)]

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return (entry for entry in list(self._table) if entry.in_use)

    @property
    def storage_size(self) -> int:
        """The number of bytes the directory takes up in its file."""
        return len(self._table) * directory_entry_size()

    def fetch_from(self, file: Any) -> None:
        """Load the table from the start of ``file``.

        Entries the file holds no complete record for are left unchanged.
        """
        raw = file.read_at(self.storage_size, 0)
        size = directory_entry_size()
        for index in range(min(len(raw) // size, len(self._table))):
            self._table[index] = DirectoryEntry.from_bytes(
                raw[index * size:(index + 1) * size]
            )

    def write_back(self, file: Any) -> None:
        """Store the table at the start of ``file``."""
        file.write_at(b"".join(entry.to_bytes() for entry in self._table), 0)

    def _find_index(self, name: str) -> int | None:
        wanted = _normalize(name)
        return next(
            (
                index
                for index, entry in enumerate(self._table)
                if entry.in_use and entry.name == wanted
            ),
            None,
        )

    def find(self, name: str) -> int | None:
        """Return the header sector of ``name``, or None if it is not listed."""
        index = self._find_index(name)
        return None if index is None else self._table[index].sector

    def add(self, name: str, sector: int) -> None:
        """List ``name`` with its header in ``sector``.

        Raises ``FileExistsError`` if the name is already listed and
        ``NoSpaceError`` if every entry is in use.
        """
        if self._find_index(name) is not None:
            raise FileExistsError(name)
        for entry in self._table:
            if not entry.in_use:
                entry.in_use = True
                entry.name = _normalize(name)
                entry.sector = sector
                return
        raise NoSpaceError(f"directory is full; cannot add {name!r}")

    def remove(self, name: str) -> None:
        """Remove ``name``; raise ``FileNotFoundError`` if it is not listed."""
        index = self._find_index(name)
        if index is None:
            raise FileNotFoundError(name)
        self._table[index].in_use = False

    def names(self) -> list[str]:
        """Return the names of all listed files, in table order."""
        return [entry.name for entry in self]

    def dump(self, disk: SynchDisk) -> str:
        """Return a listing of every file with its header and contents."""
        parts = ["Directory contents:\n"]
        for entry in self:
            parts.append(f"Name: {entry.name}, Sector: {entry.sector}\n")
            header = FileHeader(disk)
            header.fetch_from(entry.sector)
            parts.append(header.dump())
        parts.append("\n")
        return "".join(parts)