import io
import logging

import pytest

from packedbits import debug
from packedbits.bitvector import BitVector
from packedbits.demos import benchmark, bloom_filter, boolean_network
from packedbits.demos.bloom_filter import BloomFilter
from packedbits.demos.boolean_network import BoolNet

WORDS = ["apple", "banana", "cherry", "damson", "elderberry", "fig", "grape"]


def test_bloom_filter_members():
    bf = BloomFilter(4096, 5)
    for word in WORDS:
        bf.add(word)
    for word in WORDS:
        assert word in bf
        assert bf.include(word)
    assert 0 < bf.bits.total_set() <= len(WORDS) * 5


def test_bloom_filter_hash_count_floor():
    bf = BloomFilter(100, 1)
    assert bf.hashes == 3
    idx = bf.indices("word")
    assert len(idx) == 3
    assert all(0 <= i < 100 for i in idx)
    assert idx == bf.indices("word")


def test_bloom_filter_empty_rejects():
    bf = BloomFilter(1024, 4)
    assert "anything" not in bf
    assert bf.fill_ratio() == 0.0


def test_bloom_filter_rejects_zero_size():
    with pytest.raises(ValueError):
        BloomFilter(0)


def test_bloom_filter_cli(tmp_path):
    words = tmp_path / "words"
    words.write_text("\n".join(WORDS) + "\n")
    out = io.StringIO()
    rc = bloom_filter.main(
        ["--words", str(words), "--size", "2048", "--hashes", "4"],
        stdin=io.StringIO("fig\n"),
        stdout=out,
    )
    assert rc == 0
    assert "Loading dictionary...done" in out.getvalue()
    assert "In dictionary: True" in out.getvalue()


def test_boolean_network_is_reproducible():
    a = BoolNet(40, seed=7)
    b = BoolNet(40, seed=7)
    assert a.state == b.state
    assert a.update == b.update
    for _ in range(5):
        assert a.step() == b.step()
        assert len(a.state) == 40


def test_boolean_network_step_rule():
    net = BoolNet(3, seed=1)
    net.state = BitVector("110")
    net.update = [("and", 0, 1), ("xor", 0, 1), ("or", 2, 2)]
    assert net.step().to_string() == "100"
    assert net.step().to_string() == "010"


def test_boolean_network_run_output():
    net = BoolNet(16, seed=3)
    out = io.StringIO()
    net.run(4, stream=out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 5
    assert all(len(line) == 16 and set(line) <= {"0", "1"} for line in lines)


def test_boolean_network_cli(capsys):
    assert boolean_network.main(["--size", "8", "--steps", "2", "--seed", "5"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_benchmark_cases_run():
    out = io.StringIO()
    results = benchmark.run(number=2, size=64, stream=out)
    names = [name for name, _ in results]
    assert "BitVector total_set (all)" in names
    assert "BitVector + (48, all set)" in names
    assert all(elapsed >= 0 for _, elapsed in results)


@pytest.mark.slow
def test_benchmark_cli(capsys):
    assert benchmark.main(["--number", "100"]) == 0
    assert "BitVector clone" in capsys.readouterr().out


def test_debug_enable_is_idempotent(caplog):
    lg = logging.getLogger("packedbits")
    lg.addHandler(caplog.handler)
    try:
        debug.enable(True)
        debug.enable(True)
        assert debug.is_enabled()
        assert lg.level == logging.DEBUG
        assert sum(getattr(h, "_packedbits", False) for h in lg.handlers) == 1
        BitVector("0101").slice(1, 2)
    finally:
        debug.enable(False)
        lg.removeHandler(caplog.handler)
    assert not debug.is_enabled()
    assert lg.level == logging.CRITICAL
    assert any(
        r.name == "packedbits.bitvector" and "[slice] start=1 length=2" in r.getMessage()
        for r in caplog.records
    )


@pytest.mark.parametrize("raw,expected", [
    ("1", True), ("true", True), ("YES", True), (" on ", True),
    ("0", False), ("", False), ("false", False), ("garbage", False),
])
def test_debug_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv(debug.ENV_VAR, raw)
    assert debug._env_flag(debug.ENV_VAR) is expected


def test_debug_env_flag_unset(monkeypatch):
    monkeypatch.delenv(debug.ENV_VAR, raising=False)
    assert debug._env_flag(debug.ENV_VAR) is False


def test_debug_preview():
    assert debug.preview("0101") == "0101"
    assert debug.preview("1" * 40, 8) == "1111...1111 (n=40)"
