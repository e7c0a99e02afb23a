"""Micro-benchmarks for BitVector operations."""

from __future__ import annotations

import argparse
import random
import sys
import timeit
from typing import Callable, List, TextIO, Tuple

from packedbits.bitvector import BitVector


def build_cases(size: int = 256) -> List[Tuple[str, Callable[[], object]]]:
    rng = random.Random(0)
    text = "0" * size
    values = [0] * size
    empty = BitVector(size)
    full = BitVector(size)
    full.set_all_bits()
    work = BitVector(size)
    odd = BitVector(size - 16)
    odd.set_all_bits()

    def assign():
        work[rng.randrange(size)] = rng.randrange(2)

    return [
        ("BitVector initialize", lambda: BitVector(size)),
        ("BitVector init from string", lambda: BitVector(text)),
        ("BitVector init from sequence", lambda: BitVector(values)),
        ("BitVector []", lambda: work[rng.randrange(size)]),
        ("BitVector []=", assign),
        ("BitVector iterate", lambda: [b for b in work]),
        ("BitVector to_string", work.to_string),
        ("BitVector to_sequence", work.to_sequence),
        ("BitVector total_set (none)", empty.total_set),
        ("BitVector total_set (all)", full.total_set),
        ("BitVector set_all_bits", work.set_all_bits),
        ("BitVector clear_all_bits", work.clear_all_bits),
        ("BitVector toggle_bit", lambda: work.toggle_bit(1)),
        ("BitVector toggle_all_bits", work.toggle_all_bits),
        ("BitVector clone", work.clone),
        ("BitVector slice (start,len)", lambda: work.slice(17, size - 26)),
        ("BitVector slice (range)", lambda: work.slice_range(17, size - 9)),
        (f"BitVector + ({size}, all set)", lambda: full + full),
        (f"BitVector + ({size - 16}, all set)", lambda: odd + odd),
    ]


def run(number: int = 10000, size: int = 256, stream: TextIO = None) -> List[Tuple[str, float]]:
    stream = stream or sys.stdout
    results = []
    cases = build_cases(size)
    width = max(len(name) for name, _ in cases) + 2
    stream.write(f"{'':<{width}}{'seconds':>10}\n")
    for name, fn in cases:
        elapsed = timeit.timeit(fn, number=number)
        results.append((name, elapsed))
        stream.write(f"{name:<{width}}{elapsed:>10.4f}\n")
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Time BitVector operations.")
    parser.add_argument("--number", type=int, default=10000, help="calls per operation")
    parser.add_argument("--size", type=int, default=256, help="bits per vector")
    args = parser.parse_args(argv)
    if args.size < 32:
        parser.error("--size must be at least 32")
    run(args.number, args.size)
    return 0


if __name__ == "__main__":
    sys.exit(main())
