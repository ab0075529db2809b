"""File headers: the on-disk record of where a file's data sectors are."""

from __future__ import annotations

import struct

from sectorfs.bitmap import Bitmap, div_round_up
from sectorfs.synchdisk import SynchDisk

_INT = struct.Struct("<i")
_INT_SIZE = _INT.size


def num_direct(sector_size: int) -> int:
    """Number of data-sector pointers that fit in a one-sector header."""
    return (sector_size - 2 * _INT_SIZE) // _INT_SIZE


def max_file_size(sector_size: int) -> int:
    """Largest file, in bytes, that a header can describe."""
    return num_direct(sector_size) * sector_size


class NoSpaceError(Exception):
    """There is not enough room to hold a file of the requested size."""


class FileHeader:
    """Describes a file: its length and the disk sectors holding its data.

    A header occupies exactly one sector: the byte count, the sector count
    and a fixed table of sector numbers, all as little-endian 32-bit ints.
    """

    def __init__(self, disk: SynchDisk) -> None:
        self._disk = disk
        self.num_bytes = 0
        self._sectors: list[int] = []

    @property
    def num_sectors(self) -> int:
        """Number of data sectors in the file."""
        return len(self._sectors)

    @property
    def data_sectors(self) -> tuple[int, ...]:
        """Disk sector numbers of the file's data, in file order."""
        return tuple(self._sectors)

    @property
    def _sector_size(self) -> int:
        return self._disk.sector_size

    def allocate(self, free_map: Bitmap, file_size: int) -> None:
        """Set up a new file of ``file_size`` bytes, taking sectors from ``free_map``.

        Raises ``NoSpaceError`` if there are too few free sectors or the file
        is larger than a header can describe; ``free_map`` is then unchanged.
        """
        if file_size < 0:
            raise ValueError("file size cannot be negative")
        needed = div_round_up(file_size, self._sector_size)
        if needed > num_direct(self._sector_size):
            raise NoSpaceError(
                f"{file_size} bytes exceed the maximum file size of "
                f"{max_file_size(self._sector_size)}"
            )
        if free_map.num_clear() < needed:
            raise NoSpaceError(f"not enough free sectors for {file_size} bytes")
        sectors = []
        for _ in range(needed):
            sector = free_map.find_and_set()
            if sector is None:
                raise RuntimeError("free map ran out of sectors unexpectedly")
            sectors.append(sector)
        self.num_bytes = file_size
        self._sectors = sectors

    def deallocate(self, free_map: Bitmap) -> None:
        """Return all of the file's data sectors to ``free_map``."""
        for sector in self._sectors:
            if not free_map.test(sector):
                raise RuntimeError(f"sector {sector} should be marked in use")
            free_map.clear(sector)

    def fetch_from(self, sector: int) -> None:
        """Load the header stored in ``sector``."""
        raw = self._disk.read_sector(sector)
        count = num_direct(self._sector_size)
        values = struct.unpack_from(f"<{2 + count}i", raw)
        num_bytes, num_sectors = values[0], values[1]
        if not 0 <= num_sectors <= count:
            raise ValueError(
                f"sector {sector} does not hold a valid file header"
            )
        self.num_bytes = num_bytes
        self._sectors = list(values[2:2 + num_sectors])

    def write_back(self, sector: int) -> None:
        """Store the header in ``sector``."""
        count = num_direct(self._sector_size)
        table = self._sectors + [0] * (count - len(self._sectors))
        raw = struct.pack(f"<{2 + count}i", self.num_bytes, len(self._sectors), *table)
        self._disk.write_sector(sector, raw)

    def byte_to_sector(self, offset: int) -> int:
        """Return the disk sector holding byte ``offset`` of the file."""
        index = offset // self._sector_size
        if offset < 0 or index >= len(self._sectors):
            raise IndexError(f"offset {offset} is outside the file's sectors")
        return self._sectors[index]

    def file_length(self) -> int:
        """Return the number of bytes in the file."""
        return self.num_bytes

    def dump(self) -> str:
        """Return a listing of the header and the file's contents."""
        lines = [
            f"FileHeader contents.  File size: {self.num_bytes}.  File blocks:\n",
            "".join(f"{sector} " for sector in self._sectors),
            "\nFile contents:\n",
        ]
        remaining = self.num_bytes
        for sector in self._sectors:
            data = self._disk.read_sector(sector)[: max(remaining, 0)]
            remaining -= len(data)
            lines.append(
                "".join(
                    chr(byte) if 0x20 <= byte <= 0x7E else f"\\{byte:x}"
                    for byte in data
                )
            )
            lines.append("\n")
        return "".join(lines)