"""A disk of fixed-size sectors that is read and written one whole sector at a time."""

from __future__ import annotations

import threading


class SynchDisk:
    """An in-memory disk whose requests return only once they have completed.

    Only one request is served at a time; concurrent callers wait their turn.
    """

    def __init__(self, num_sectors: int, sector_size: int) -> None:
        if num_sectors <= 0:
            raise ValueError("a disk needs at least one sector")
        if sector_size <= 0:
            raise ValueError("sectors must hold at least one byte")
        self.num_sectors = num_sectors
        self.sector_size = sector_size
        self._storage = bytearray(num_sectors * sector_size)
        self._lock = threading.Lock()

    def _span(self, sector: int) -> slice:
        if not 0 <= sector < self.num_sectors:
            raise IndexError(
                f"sector {sector} out of range 0..{self.num_sectors - 1}"
            )
        start = sector * self.sector_size
        return slice(start, start + self.sector_size)

    def read_sector(self, sector: int) -> bytes:
        """Return the whole contents of ``sector``."""
        span = self._span(sector)
        with self._lock:
            return bytes(self._storage[span])

    def write_sector(self, sector: int, data: bytes) -> None:
        """Replace the contents of ``sector`` with ``data``.

        Data shorter than a sector is padded with zero bytes; longer data
        raises ``ValueError``.
        """
        span = self._span(sector)
        if len(data) > self.sector_size:
            raise ValueError(
                f"{len(data)} bytes do not fit in a {self.sector_size}-byte sector"
            )
        block = bytes(data).ljust(self.sector_size, b"\0")
        with self._lock:
            self._storage[span] = block