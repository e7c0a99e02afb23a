"""Dictionary look-up with a bloom filter over a BitVector.

Written for clarity rather than speed.  Index positions are derived with the
double hashing scheme of Kirsch and Mitzenmacher: two digests give h1 and h2
and the remaining indices are ``(h1 + i * h2) % m``.

With a 98,569 word dictionary and a 0.001 false positive rate, m = 1,417,185
bits and k = 10 hash functions are a good fit.
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from typing import Iterable, List, TextIO

from packedbits import debug
from packedbits.bitvector import BitVector

log = debug.dbg("demos.bloom_filter")


class BloomFilter:
    def __init__(self, m: int = 1000000, k: int = 3):
        if m <= 0:
            raise ValueError("bloom filter needs at least one bit")
        self.size = m
        self.hashes = max(k, 3)
        self.bits = BitVector(self.size)

    def indices(self, word: str) -> List[int]:
        """Return the `hashes` bit positions for `word`."""
        data = word.encode("utf-8")
        h1 = int.from_bytes(hashlib.md5(data).digest(), "big") % self.size
        h2 = int(hashlib.sha1(data).hexdigest(), 16) % self.size
        positions = [h1, h2]
        for i in range(1, self.hashes - 1):
            positions.append((h1 + i * h2) % self.size)
        return positions

    def add(self, word: str) -> None:
        for i in self.indices(word):
            self.bits.set_bit(i)

    def update(self, words: Iterable[str]) -> int:
        count = 0
        for word in words:
            self.add(word)
            count += 1
        return count

    def include(self, word: str) -> bool:
        for i in self.indices(word):
            if self.bits[i] == 0:
                return False
        return True

    __contains__ = include

    def fill_ratio(self) -> float:
        return self.bits.total_set() / self.size


def load_words(stream: TextIO) -> Iterable[str]:
    for line in stream:
        word = line.strip()
        if word:
            yield word


def build_parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load a word list into a bloom filter and look words up.",
        add_help=add_help,
    )
    parser.add_argument("--words", type=str, default="/usr/share/dict/words",
                        help="word list, one word per line")
    parser.add_argument("--size", type=int, default=1417185, help="number of filter bits (m)")
    parser.add_argument("--hashes", type=int, default=10, help="number of hash functions (k)")
    parser.add_argument("--debug", action="store_true", help="enable packedbits debug logging")
    return parser


def main(argv=None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if args.debug:
        debug.enable(True)

    bf = BloomFilter(args.size, args.hashes)
    stdout.write("Loading dictionary...")
    stdout.flush()
    with open(args.words, encoding="utf-8", errors="replace") as fh:
        loaded = bf.update(load_words(fh))
    stdout.write("done\n")
    log.info("loaded %d words, fill ratio %.4f", loaded, bf.fill_ratio())

    stdout.write("Enter words to look up, ctrl-d to quit.\n")
    while True:
        stdout.write("Word: ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        stdout.write(f"In dictionary: {line.strip() in bf}\n")
    stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
