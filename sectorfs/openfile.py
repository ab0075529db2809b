"""Open files: byte-level reads and writes on top of whole-sector disk access."""

from __future__ import annotations

from sectorfs.bitmap import div_round_down
from sectorfs.filehdr import FileHeader
from sectorfs.synchdisk import SynchDisk


class OpenFile:
    """A file on ``disk`` whose header is stored in ``sector``.

    The header is read once when the file is opened and kept in memory.
    Files have a fixed length: reads and writes are cut short at its end.
    """

    def __init__(self, disk: SynchDisk, sector: int) -> None:
        self._disk = disk
        self.header = FileHeader(disk)
        self.header.fetch_from(sector)
        self.position = 0

    def seek(self, position: int) -> None:
        """Set the position at which the next ``read`` or ``write`` starts."""
        self.position = position

    def read(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes`` from the current position and advance it."""
        data = self.read_at(num_bytes, self.position)
        self.position += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write ``data`` at the current position and advance it.

        Returns the number of bytes actually written.
        """
        written = self.write_at(data, self.position)
        self.position += written
        return written

    def _clip(self, num_bytes: int, position: int) -> int:
        length = self.header.file_length()
        if num_bytes <= 0 or position >= length:
            return 0
        if position < 0:
            raise ValueError(f"position {position} is negative")
        return min(num_bytes, length - position)

    def _sector_range(self, num_bytes: int, position: int) -> range:
        size = self._disk.sector_size
        first = div_round_down(position, size)
        last = div_round_down(position + num_bytes - 1, size)
        return range(first, last + 1)

    def read_at(self, num_bytes: int, position: int) -> bytes:
        """Read up to ``num_bytes`` starting at ``position``; the position is unchanged."""
        num_bytes = self._clip(num_bytes, position)
        if num_bytes == 0:
            return b""
        size = self._disk.sector_size
        sectors = self._sector_range(num_bytes, position)
        buffer = b"".join(
            self._disk.read_sector(self.header.byte_to_sector(index * size))
            for index in sectors
        )
        start = position - sectors.start * size
        return buffer[start:start + num_bytes]

    def write_at(self, data: bytes, position: int) -> int:
        """Write ``data`` starting at ``position``; the position is unchanged.

        Parts of partially covered sectors keep their old contents.  Returns
        the number of bytes actually written.
        """
        num_bytes = self._clip(len(data), position)
        if num_bytes == 0:
            return 0
        size = self._disk.sector_size
        sectors = self._sector_range(num_bytes, position)
        start = position - sectors.start * size
        end = start + num_bytes
        buffer = bytearray(len(sectors) * size)
        if start != 0:
            buffer[:size] = self._disk.read_sector(
                self.header.byte_to_sector(sectors.start * size)
            )
        if end != len(buffer) and (len(sectors) > 1 or start == 0):
            buffer[-size:] = self._disk.read_sector(
                self.header.byte_to_sector(sectors[-1] * size)
            )
        buffer[start:end] = bytes(data[:num_bytes])
        for offset, index in enumerate(sectors):
            self._disk.write_sector(
                self.header.byte_to_sector(index * size),
                bytes(buffer[offset * size:(offset + 1) * size]),
            )
        return num_bytes

    def length(self) -> int:
        """Return the number of bytes in the file."""
        return self.header.file_length()