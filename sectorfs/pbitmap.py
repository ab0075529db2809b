"""A bitmap that can be stored in, and fetched from, an open file."""

from __future__ import annotations

from typing import Any

from sectorfs.bitmap import BYTES_IN_WORD, Bitmap


class PersistentBitmap(Bitmap):
    """A bitmap whose contents live at the start of a file.

    If ``file`` is given, the bitmap is loaded from it; otherwise every bit
    starts clear.  The file needs ``read_at(num_bytes, position)`` returning
    bytes and ``write_at(data, position)``.
    """

    def __init__(self, num_items: int, file: Any = None) -> None:
        super().__init__(num_items)
        if file is not None:
            self.fetch_from(file)

    @property
    def storage_size(self) -> int:
        """The number of bytes the bitmap takes up in its file."""
        return self.num_words * BYTES_IN_WORD

    def fetch_from(self, file: Any) -> None:
        """Overwrite the bitmap with the contents stored in ``file``."""
        self.load_bytes(file.read_at(self.storage_size, 0))

    def write_back(self, file: Any) -> None:
        """Store the bitmap at the start of ``file``."""
        file.write_at(self.to_bytes(), 0)