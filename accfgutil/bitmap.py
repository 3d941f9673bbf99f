"""Fixed-size bitmaps with range set/clear and bit searching."""

from __future__ import annotations


class Bitmap:
    """A bitmap of ``nbits`` bits, all clear on creation."""

    def __init__(self, nbits: int) -> None:
        if nbits < 0:
            raise ValueError(f"negative bitmap size: {nbits}")
        self._nbits = nbits
        self._bits = 0

    def __len__(self) -> int:
        return self._nbits

    def __repr__(self) -> str:
        return f"Bitmap(nbits={self._nbits}, bits={self._bits:#x})"

    @property
    def _all_ones(self) -> int:
        return (1 << self._nbits) - 1

    def _range_mask(self, start: int, length: int) -> int:
        if start < 0 or length < 0:
            raise IndexError(f"invalid range: start={start}, length={length}")
        if start + length > self._nbits:
            raise IndexError(
                f"range {start}+{length} exceeds bitmap of {self._nbits} bits"
            )
        return ((1 << length) - 1) << start

    def set(self, start: int, length: int) -> None:
        """Set ``length`` bits starting at bit ``start``."""
        self._bits |= self._range_mask(start, length)

    def clear(self, start: int, length: int) -> None:
        """Clear ``length`` bits starting at bit ``start``."""
        self._bits &= ~self._range_mask(start, length)

    def test(self, nr: int) -> bool:
        """Tell whether bit ``nr`` is set."""
        if not 0 <= nr < self._nbits:
            raise IndexError(f"bit {nr} outside bitmap of {self._nbits} bits")
        return bool((self._bits >> nr) & 1)

    def _find_next(self, word: int, offset: int) -> int:
        if not self._nbits or offset >= self._nbits:
            return self._nbits
        remaining = word >> max(offset, 0)
        if not remaining:
            return self._nbits
        lowest = (remaining & -remaining).bit_length() - 1
        return min(max(offset, 0) + lowest, self._nbits)

    def find_next_bit(self, offset: int) -> int:
        """Index of the first set bit at or after ``offset``, or ``len(self)``."""
        return self._find_next(self._bits, offset)

    def find_next_zero_bit(self, offset: int) -> int:
        """Index of the first clear bit at or after ``offset``, or ``len(self)``."""
        return self._find_next(~self._bits & self._all_ones, offset)

    def full(self) -> bool:
        """Tell whether every bit is set."""
        return self.find_next_zero_bit(0) == self._nbits