"""A random boolean network on a BitVector.

Every bit has two neighbour bits and an operation (and, or, xor), all chosen
at random.  Each step sets every bit to its operation applied to the previous
state of its neighbours.  Every such network eventually falls into a cyclic or
fixed-point attractor.
"""

from __future__ import annotations

import argparse
import operator
import random
import sys
from typing import List, Optional, TextIO, Tuple

from packedbits import debug
from packedbits.bitvector import BitVector

log = debug.dbg("demos.boolean_network")

OPERATIONS = {
    "and": operator.and_,
    "or": operator.or_,
    "xor": operator.xor,
}

Rule = Tuple[str, int, int]


class BoolNet:
    def __init__(self, size: int = 80, seed: Optional[int] = None):
        self.size = size
        self._rng = random.Random(seed)
        self.state = self.random_network(size)
        self.update = self.random_update(size)

    def random_network(self, size: int) -> BitVector:
        ba = BitVector(size)
        for b in range(size):
            if self._rng.randrange(2) == 1:
                ba.set_bit(b)
        return ba

    def random_update(self, size: int) -> List[Rule]:
        """One ``(op, n1, n2)`` rule per bit; n1 and n2 index the neighbours."""
        names = sorted(OPERATIONS)
        return [(self._rng.choice(names), self._rng.randrange(size), self._rng.randrange(size))
                for _ in range(size)]

    def step(self) -> BitVector:
        old_state = self.state.clone()
        for i, (op, n1, n2) in enumerate(self.update):
            self.state[i] = OPERATIONS[op](old_state[n1], old_state[n2])
        return self.state

    def run(self, steps: int = 23, stream: TextIO = None) -> None:
        stream = stream or sys.stdout
        stream.write(f"{self.state}\n")
        for _ in range(steps):
            stream.write(f"{self.step()}\n")
        log.debug("ran %d steps, %d bits set", steps, self.state.total_set())


def build_parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a random boolean network.", add_help=add_help)
    parser.add_argument("--size", type=int, default=80)
    parser.add_argument("--steps", type=int, default=23)
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible network")
    parser.add_argument("--debug", action="store_true", help="enable packedbits debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        debug.enable(True)
    BoolNet(args.size, seed=args.seed).run(args.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
