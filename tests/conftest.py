import os

import pytest

from packedbits import debug
from packedbits.bitvector import BitVector


def pytest_addoption(parser):
    parser.addoption(
        "--packedbits-debug",
        action="store_true",
        help="Enable packedbits debug logging during tests",
    )
    parser.addoption(
        "--run-slow",
        action="store_true",
        help="Run the slower exhaustive and benchmark tests",
    )


def pytest_configure(config):
    if config.getoption("--packedbits-debug"):
        os.environ["PACKEDBITS_DEBUG"] = "1"
        debug.enable(True)
    config.addinivalue_line(
        "markers",
        "slow: exhaustive or timing tests",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Shared vectors
# ---------------------------------------------------------------------------


@pytest.fixture
def ten_bits():
    """10-bit vector with bits 1 and 5 set: ``0100010000``."""
    bv = BitVector(10)
    bv[1] = 1
    bv[5] = 1
    return bv


@pytest.fixture
def thousand_bits():
    return BitVector(1000)


@pytest.fixture(params=[0, 1, 7, 8, 9, 15, 16, 17, 31, 32, 33, 64, 100])
def size(request):
    """Sizes around byte boundaries."""
    return request.param
