"""Fixed-size bitmap used for page and resource allocation."""

from __future__ import annotations


def byte_count(bit_count: int) -> int:
    """Return the number of bytes needed to hold ``bit_count`` bits."""
    return (bit_count + 7) // 8


class Bitmap:
    """A bitmap of ``bit_count`` bits, all initialised to ``value``."""

    def __init__(self, bit_count: int, value: int = 0) -> None:
        if bit_count < 0:
            raise ValueError("bit_count must not be negative")
        self._bit_count = bit_count
        fill = 0xFF if value else 0x00
        self._bits = bytearray([fill]) * byte_count(bit_count)

    def __len__(self) -> int:
        return self._bit_count

    def __repr__(self) -> str:
        bits = "".join(str(self.get(i)) for i in range(self._bit_count))
        return f"Bitmap({bits!r})"

    def _check(self, index: int) -> None:
        if not 0 <= index < self._bit_count:
            raise IndexError(f"bit index {index} out of range")

    def get(self, index: int) -> int:
        """Return the bit at ``index`` as 0 or 1."""
        self._check(index)
        return 1 if self._bits[index // 8] & (1 << (index % 8)) else 0

    def is_set(self, index: int) -> bool:
        """Return True if the bit at ``index`` is 1."""
        return self.get(index) == 1

    def set_range(self, index: int, count: int, value: int) -> None:
        """Set ``count`` bits starting at ``index``; bits past the end are ignored."""
        end = min(index + count, self._bit_count)
        for i in range(max(index, 0), end):
            mask = 1 << (i % 8)
            if value:
                self._bits[i // 8] |= mask
            else:
                self._bits[i // 8] &= ~mask & 0xFF

    def alloc(self, count: int, value: int = 0) -> int | None:
        """Find the first run of ``count`` bits equal to ``value`` and flip them.

        Returns the index of the run's first bit, or None if no run exists.
        """
        wanted = 1 if value else 0
        run = 0
        for i in range(self._bit_count):
            if self.get(i) == wanted:
                run += 1
                if run == count:
                    start = i - run + 1
                    self.set_range(start, run, not wanted)
                    return start
            else:
                run = 0
        return None