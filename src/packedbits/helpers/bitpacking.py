"""Byte-level primitives for MSB-first packed bit storage.

Logical bit ``i`` lives in byte ``i // 8`` at bit offset ``7 - (i % 8)``, so
the first logical bit is the most significant bit of the first byte.  This
matches numpy's default ``bitorder='big'`` for ``packbits``/``unpackbits``.

Every buffer handed around here keeps the padding bits (those past the
logical length in the final byte) cleared; ``total_set`` and equality rely on
that.
"""

from __future__ import annotations

import numpy as np


# number of set bits for every byte value
POPCOUNT_TABLE = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


def intceil(val: int, base: int = 8) -> int:
    """Return the smallest multiple of `base` that is >= `val`."""
    return (val + base - 1) // base * base


def bittobyte(bits: int) -> int:
    return intceil(bits) // 8


def bit_position(index: int) -> tuple[int, int]:
    """Map a logical bit index to ``(byte_index, bit_offset)``."""
    return index >> 3, 7 - (index & 7)


def mask_padding_bits(buf: bytearray, length_bits: int) -> bytearray:
    """Clear every bit of `buf` at or beyond `length_bits`."""
    total_bits = len(buf) * 8
    pad_bits = total_bits - length_bits
    if pad_bits <= 0:
        return buf
    last = length_bits // 8
    if length_bits % 8:
        buf[last] &= (0xFF << (8 - length_bits % 8)) & 0xFF
        last += 1
    for byte_i in range(last, len(buf)):
        buf[byte_i] = 0
    return buf


def build_fill_buffer(fill_value: int, length_bits: int) -> bytearray:
    """Return a fresh buffer of `length_bits` bits all set to `fill_value`."""
    nbytes = bittobyte(length_bits)
    buf = bytearray(b"\xff" * nbytes if fill_value else nbytes)
    return mask_padding_bits(buf, length_bits)


def unpack(buf, length_bits: int) -> np.ndarray:
    """Expand the first `length_bits` bits of `buf` into a uint8 array of 0/1."""
    if length_bits == 0:
        return np.zeros(0, dtype=np.uint8)
    raw = np.frombuffer(bytes(buf), dtype=np.uint8)
    return np.unpackbits(raw, count=length_bits)


def pack(bits: np.ndarray) -> bytearray:
    """Pack a 0/1 array into an MSB-first bytearray (padding zero)."""
    if len(bits) == 0:
        return bytearray()
    return bytearray(np.packbits(np.asarray(bits, dtype=np.uint8)).tobytes())


def extract_bit_region(data, start_bit: int, length: int) -> bytearray:
    """Copy `length` bits of `data` starting at `start_bit` into a new buffer."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Extraction source must be bytes-like")
    if length == 0:
        return bytearray()
    if start_bit % 8 == 0:
        first = start_bit // 8
        out = bytearray(data[first:first + bittobyte(length)])
        return mask_padding_bits(out, length)
    bits = unpack(data, start_bit + length)[start_bit:]
    return pack(bits)


def write_bit_region(backing: bytearray, start_bit: int, buf, length_bits: int) -> None:
    """Overwrite `length_bits` bits of `backing` at `start_bit` with bits from `buf`."""
    for i in range(length_bits):
        src_bit_val = (buf[i // 8] >> (7 - (i % 8))) & 1
        dest_byte_i, dest_bit_offset = bit_position(start_bit + i)
        if src_bit_val:
            backing[dest_byte_i] |= (1 << dest_bit_offset)
        else:
            backing[dest_byte_i] &= ~(1 << dest_bit_offset) & 0xFF


def popcount(buf) -> int:
    """Count set bits across a whole byte buffer, one table lookup per byte."""
    if not buf:
        return 0
    raw = np.frombuffer(bytes(buf), dtype=np.uint8)
    return int(POPCOUNT_TABLE[raw].sum(dtype=np.int64))
