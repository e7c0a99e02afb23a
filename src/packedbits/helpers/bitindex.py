from numbers import Integral
from typing import Optional, Union


class BitIndex:
    """
    A small metadata struct describing one indexing request against a vector:
      - size:  logical length of the vector being indexed
      - index: raw Python index (int or slice)

    All index-taking operations go through ``normalize`` so negative indices
    behave identically for reads, writes, toggles and slices.
    """
    def __init__(self, size: int, index: Union[int, slice]):
        self.size = size
        self.index = index

    def __repr__(self):
        return f"BitIndex(size={self.size}, index={self.index!r})"

    @staticmethod
    def check_integer(index) -> int:
        # bool is an int subclass but never a position
        if isinstance(index, bool) or not isinstance(index, Integral):
            raise TypeError(f"bit indices must be integers, not {type(index).__name__}")
        return int(index)

    def normalize(self) -> int:
        """Map a possibly negative position onto an offset from the start."""
        index = self.check_integer(self.index)
        return self.size + index if index < 0 else index

    def in_range(self) -> Optional[int]:
        """Normalized position, or None when it falls outside ``[0, size)``."""
        index = self.normalize()
        if 0 <= index < self.size:
            return index
        return None

    def require(self) -> int:
        """Normalized position for mutation; out of range raises IndexError."""
        index = self.in_range()
        if index is None:
            raise IndexError(f"index {self.index} out of bit vector of size {self.size}")
        return index

    # -- slice resolution -----------------------------------------------------
    def span(self, length: int) -> Optional[tuple[int, int]]:
        """
        Resolve ``(start, length)`` with ``self.index`` as the start.

        Returns None when the length is negative, the normalized start lies
        outside ``[0, size]`` or the span runs past the end.  Spans are never
        truncated.
        """
        return self._resolve(self.normalize(), length)

    def _resolve(self, start: int, length: int) -> Optional[tuple[int, int]]:
        # `start` is already normalized
        length = self.check_integer(length)
        if length < 0 or start < 0 or start > self.size:
            return None
        if start + length > self.size:
            return None
        return start, length

    def inclusive_span(self, last: int) -> Optional[tuple[int, int]]:
        """
        Resolve the inclusive range ``self.index..last`` to ``(start, length)``.

        A range whose last position comes before its first is empty rather
        than missing, provided both ends lie inside the vector.
        """
        first = self.normalize()
        last = BitIndex(self.size, last).normalize()
        if last >= self.size:
            return None
        return self._resolve(first, max(0, last - first + 1))

    def slice_span(self) -> Optional[tuple[int, int]]:
        """Resolve a Python ``slice`` (exclusive stop) to ``(start, length)``."""
        sl = self.index
        if sl.step not in (None, 1):
            raise ValueError("bit vector slices do not support a step")
        start = 0 if sl.start is None else BitIndex(self.size, sl.start).normalize()
        stop = self.size if sl.stop is None else BitIndex(self.size, sl.stop).normalize()
        return self._resolve(start, stop - start)
