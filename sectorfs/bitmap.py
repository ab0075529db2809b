"""A fixed-size array of bits, each of which can be set, cleared and tested."""

from __future__ import annotations

BITS_IN_BYTE = 8
BYTES_IN_WORD = 4
BITS_IN_WORD = BYTES_IN_WORD * BITS_IN_BYTE


def _trunc_div(n: int, s: int) -> int:
    """Integer division that truncates toward zero."""
    q = abs(n) // abs(s)
    return q if (n >= 0) == (s > 0) else -q


def _trunc_mod(n: int, s: int) -> int:
    """Remainder matching truncating division."""
    return n - _trunc_div(n, s) * s


def div_round_down(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, rounding toward zero."""
    return _trunc_div(n, s)


def div_round_up(n: int, s: int) -> int:
    """Divide ``n`` by ``s``, rounding up when there is a positive remainder."""
    return _trunc_div(n, s) + (1 if _trunc_mod(n, s) > 0 else 0)


class Bitmap:
    """An array of bits stored as whole 32-bit little-endian words.

    Most useful for tracking which elements of an array, such as disk
    sectors, are in use.
    """

    def __init__(self, num_items: int) -> None:
        if num_items <= 0:
            raise ValueError("a bitmap needs at least one bit")
        self.num_bits = num_items
        self.num_words = div_round_up(num_items, BITS_IN_WORD)
        self._map = bytearray(self.num_words * BYTES_IN_WORD)

    def __len__(self) -> int:
        return self.num_bits

    def _check(self, which: int) -> None:
        if not 0 <= which < self.num_bits:
            raise IndexError(f"bit {which} out of range 0..{self.num_bits - 1}")

    def mark(self, which: int) -> None:
        """Set bit ``which``."""
        self._check(which)
        self._map[which // BITS_IN_BYTE] |= 1 << (which % BITS_IN_BYTE)

    def clear(self, which: int) -> None:
        """Clear bit ``which``."""
        self._check(which)
        self._map[which // BITS_IN_BYTE] &= ~(1 << (which % BITS_IN_BYTE)) & 0xFF

    def test(self, which: int) -> bool:
        """Return True if bit ``which`` is set."""
        self._check(which)
        return bool(self._map[which // BITS_IN_BYTE] & (1 << (which % BITS_IN_BYTE)))

    def find_and_set(self) -> int | None:
        """Set the first clear bit and return its number, or None if all are set."""
        for i in range(self.num_bits):
            if not self.test(i):
                self.mark(i)
                return i
        return None

    def num_clear(self) -> int:
        """Return how many bits are clear."""
        return sum(1 for i in range(self.num_bits) if not self.test(i))

    def set_bits(self) -> list[int]:
        """Return the numbers of all set bits, in increasing order."""
        return [i for i in range(self.num_bits) if self.test(i)]

    def dump(self) -> str:
        """Return a printable listing of the set bits."""
        listed = "".join(f"{i}, " for i in self.set_bits())
        return f"Bitmap set:\n{listed}\n"

    def to_bytes(self) -> bytes:
        """Return the raw storage: ``num_words`` little-endian 32-bit words."""
        return bytes(self._map)

    def load_bytes(self, data: bytes) -> None:
        """Overwrite the raw storage from ``data``.

        Only as many bytes as the storage holds are used; if ``data`` is
        shorter, the remaining bytes are left unchanged.
        """
        chunk = bytes(data[: len(self._map)])
        self._map[: len(chunk)] = chunk