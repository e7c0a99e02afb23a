from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Iterator, List, Optional, Union

import numpy as np

from . import debug
from .helpers.bitindex import BitIndex
from .helpers.bitpacking import (
    bit_position,
    bittobyte,
    build_fill_buffer,
    extract_bit_region,
    mask_padding_bits,
    pack,
    popcount,
    unpack,
    write_bit_region,
)
from .helpers.coercion import is_truthy

log = debug.dbg("bitvector")


class BitVector:
    """
    Fixed-length vector of bits packed eight to a byte.

    ``BitVector(arg)`` picks its constructor from the argument type:

      * ``int``      -> that many bits, all cleared
      * ``str``      -> leading '0'/'1' characters; parsing stops at the first
                        other character, so ``"1010abcd"`` gives ``1010`` and
                        ``"abcd"`` gives an empty vector
      * iterable     -> one bit per element, ``None``/``False``/``0`` clear and
                        anything else set

    Reads outside the vector return ``None``; writes outside it raise
    ``IndexError``.  Negative indices count back from the end everywhere.
    """

    def __init__(self, arg: Union[int, str, Iterable[Any]]):
        if isinstance(arg, bool):
            raise TypeError("must be size, string, or sequence")
        if isinstance(arg, (int, np.integer)):
            size = int(arg)
            if size < 0:
                raise ValueError(f"bit vector size must be non-negative, got {size}")
            self._size = size
            self._bytes = bytearray(bittobyte(size))
        elif isinstance(arg, str):
            self._init_from_bits(self._leading_bits(arg))
        elif isinstance(arg, Iterable):
            self._init_from_bits([1 if is_truthy(v) else 0 for v in arg])
        else:
            raise TypeError("must be size, string, or sequence")
        if debug.is_enabled():
            log.debug("[init] size=%d from %s", self._size, type(arg).__name__)

    @staticmethod
    def _leading_bits(text: str) -> List[int]:
        bits = []
        for ch in text:
            if ch == "0":
                bits.append(0)
            elif ch == "1":
                bits.append(1)
            else:
                break
        return bits

    def _init_from_bits(self, bits) -> None:
        self._size = len(bits)
        self._bytes = pack(bits)

    @classmethod
    def _wrap(cls, storage: bytearray, size: int) -> "BitVector":
        # adopt storage that is already packed and padded
        vec = cls.__new__(cls)
        vec._size = size
        vec._bytes = storage
        return vec

    # -- alternate constructors ----------------------------------------------
    @classmethod
    def from_string(cls, text: str) -> "BitVector":
        if not isinstance(text, str):
            raise TypeError("from_string expects a str")
        return cls(text)

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> "BitVector":
        if isinstance(values, str) or not isinstance(values, Iterable):
            raise TypeError("from_sequence expects a non-string iterable")
        return cls(values)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray], size: Optional[int] = None) -> "BitVector":
        """Build a vector over a copy of MSB-first packed `data`.

        `size` defaults to every bit of `data`; bits past it are dropped.
        """
        total = len(data) * 8
        if size is None:
            size = total
        if size < 0 or size > total:
            raise ValueError(f"size {size} does not fit in {len(data)} bytes")
        storage = bytearray(data[:bittobyte(size)])
        return cls._wrap(mask_padding_bits(storage, size), size)

    # -- size & identity ------------------------------------------------------
    @property
    def size(self) -> int:
        """Number of addressable bits."""
        return self._size

    length = size

    def __len__(self):
        return self._size

    def __eq__(self, other):
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._size == other._size and self._bytes == other._bytes

    __hash__ = None

    def clone(self) -> "BitVector":
        return self._wrap(bytearray(self._bytes), self._size)

    __copy__ = clone

    def __deepcopy__(self, memo):
        return self.clone()

    # -- single-bit access ----------------------------------------------------
    def _read(self, index: int) -> int:
        byte_index, bit_offset = bit_position(index)
        return (self._bytes[byte_index] >> bit_offset) & 1

    def _write(self, index: int, value: bool) -> None:
        byte_index, bit_offset = bit_position(index)
        if value:
            self._bytes[byte_index] |= (1 << bit_offset)
        else:
            self._bytes[byte_index] &= ~(1 << bit_offset) & 0xFF

    def get(self, index: int) -> Optional[int]:
        """Bit at `index` as 0/1, or None when it is out of range."""
        index = BitIndex(self._size, index).in_range()
        if index is None:
            return None
        return self._read(index)

    def set(self, index: int, value: Any) -> None:
        self._write(BitIndex(self._size, index).require(), is_truthy(value))

    def set_bit(self, index: int) -> None:
        self._write(BitIndex(self._size, index).require(), True)

    def clear_bit(self, index: int) -> None:
        self._write(BitIndex(self._size, index).require(), False)

    def toggle_bit(self, index: int) -> None:
        byte_index, bit_offset = bit_position(BitIndex(self._size, index).require())
        self._bytes[byte_index] ^= (1 << bit_offset)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._copy_span(BitIndex(self._size, key).slice_span())
        return self.get(key)

    def __setitem__(self, key, value):
        if not isinstance(key, slice):
            self.set(key, value)
            return
        span = BitIndex(self._size, key).slice_span()
        if span is None:
            raise IndexError(f"slice {key} out of bit vector of size {self._size}")
        start, length = span
        if isinstance(value, BitVector):
            values = value.to_sequence()
        elif isinstance(value, str):
            values = self._leading_bits(value)
        else:
            values = list(value)
        if len(values) != length:
            raise ValueError(f"cannot assign {len(values)} bits to a slice of {length}")
        write_bit_region(self._bytes, start, pack([1 if is_truthy(v) else 0 for v in values]), length)

    # -- slicing ---------------------------------------------------------------
    def _copy_span(self, span) -> Optional["BitVector"]:
        if span is None:
            return None
        start, length = span
        if debug.is_enabled():
            log.debug("[slice] start=%d length=%d of size=%d", start, length, self._size)
        return self._wrap(extract_bit_region(self._bytes, start, length), length)

    def slice(self, start: int, length: int) -> Optional["BitVector"]:
        """Copy of `length` bits from `start`, or None if the span does not fit."""
        return self._copy_span(BitIndex(self._size, start).span(length))

    def slice_range(self, first: int, last: int) -> Optional["BitVector"]:
        """Copy of the inclusive range ``first..last``, or None if it does not fit."""
        return self._copy_span(BitIndex(self._size, first).inclusive_span(last))

    # -- bulk operations -------------------------------------------------------
    def set_all_bits(self) -> None:
        self._bytes[:] = build_fill_buffer(1, self._size)

    def clear_all_bits(self) -> None:
        self._bytes[:] = bytearray(len(self._bytes))

    def toggle_all_bits(self) -> None:
        flipped = np.bitwise_not(np.frombuffer(bytes(self._bytes), dtype=np.uint8))
        self._bytes[:] = mask_padding_bits(bytearray(flipped.tobytes()), self._size)

    def total_set(self) -> int:
        """Number of bits currently set."""
        return popcount(self._bytes)

    # -- concatenation ---------------------------------------------------------
    @classmethod
    def concat(cls, left: "BitVector", right: "BitVector") -> "BitVector":
        """New vector holding `left`'s bits followed by `right`'s."""
        size = left._size + right._size
        if left._size % 8 == 0:
            storage = left._bytes + right._bytes
        else:
            storage = pack(np.concatenate((unpack(left._bytes, left._size),
                                           unpack(right._bytes, right._size))))
        if debug.is_enabled():
            log.debug("[concat] %d + %d -> %d bits", left._size, right._size, size)
        return cls._wrap(storage, size)

    def __add__(self, other):
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.concat(self, other)

    # -- conversions -----------------------------------------------------------
    def _unpacked(self) -> np.ndarray:
        return unpack(self._bytes, self._size)

    def to_string(self) -> str:
        return (self._unpacked() + ord("0")).tobytes().decode("ascii")

    def to_sequence(self) -> List[int]:
        return self._unpacked().tolist()

    to_list = to_sequence

    def to_bytes(self) -> bytes:
        """Packed storage, MSB first, padding bits zero."""
        return bytes(self._bytes)

    def __bytes__(self):
        return self.to_bytes()

    def hex(self) -> str:
        return self._bytes.hex()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{type(self).__name__}({debug.preview(self.to_string(), 64)!r})"

    # -- enumeration -----------------------------------------------------------
    def __iter__(self) -> Iterator[int]:
        for i in range(self._size):
            yield self._read(i)

    def each(self) -> Iterator[int]:
        return iter(self)
