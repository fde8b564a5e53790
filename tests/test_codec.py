import random

import pytest

from huffpack import container
from huffpack.codec import compress, compress_with_stats, compression_stats, decompress
from huffpack.errors import (
    CorruptStreamError,
    EmptyInputError,
    FieldOverflowError,
    HuffpackError,
    TruncatedHeaderError,
    TruncatedTreeError,
)


def test_roundtrip_random_10kb():
    rng = random.Random(1)
    data = bytes(rng.getrandbits(8) for _ in range(10 * 1024))
    assert decompress(compress(data)) == data


def test_roundtrip_all_bytes_once():
    data = bytes(range(256))
    assert decompress(compress(data)) == data


def test_roundtrip_text():
    data = b"This is a test of the Huffman compressor. " * 200
    compressed = compress(data)
    assert len(compressed) < len(data)
    assert decompress(compressed) == data


def test_small_inputs():
    rng = random.Random(2)
    for n in (1, 2, 3, 7, 8, 9):
        data = bytes(rng.getrandbits(8) for _ in range(n))
        assert decompress(compress(data)) == data


def test_skewed_distribution():
    rng = random.Random(3)
    data = bytes(rng.choices(range(20), weights=[2 ** i for i in range(20)], k=5000))
    assert decompress(compress(data)) == data


def test_escape_bytes_as_data():
    data = b"*\\*\\**\\\\ stars * and backslashes \\ " * 20
    compressed = compress(data)
    assert b"\\*" in compressed or b"\\\\" in compressed
    assert decompress(compressed) == data


def test_only_escape_bytes():
    assert decompress(compress(b"*")) == b"*"
    assert decompress(compress(b"\\\\\\")) == b"\\\\\\"
    assert decompress(compress(b"*\\")) == b"*\\"


def test_deterministic_output():
    data = bytes(random.Random(4).getrandbits(8) for _ in range(2048))
    assert compress(data) == compress(data)


def test_single_symbol_container():
    data = b"A" * 1000
    compressed = compress(data)
    assert compressed == b"\x00\x01A" + (1000).to_bytes(8, "big")
    assert decompress(compressed) == data


def test_single_symbol_container_requires_length():
    with pytest.raises(CorruptStreamError):
        decompress(b"\x00\x01A")
    with pytest.raises(CorruptStreamError):
        decompress(b"\x00\x01A" + (0).to_bytes(8, "big"))
    with pytest.raises(CorruptStreamError):
        decompress(b"\x00\x01A\x00")


def test_single_symbol_length_above_limit_is_rejected():
    for count in (container.MAX_RUN_LENGTH + 1, 1 << 45, 1 << 63, (1 << 64) - 1):
        with pytest.raises(CorruptStreamError):
            decompress(b"\x00\x01A" + count.to_bytes(8, "big"))


def test_single_symbol_run_above_limit_is_not_encoded(monkeypatch):
    monkeypatch.setattr(container, "MAX_RUN_LENGTH", 10)
    assert decompress(compress(b"A" * 10)) == b"A" * 10
    with pytest.raises(FieldOverflowError):
        compress(b"A" * 11)


def test_malformed_containers_raise_only_format_errors(monkeypatch):
    monkeypatch.setattr(container, "MAX_RUN_LENGTH", 1 << 20)
    rng = random.Random(5)
    alphabet = b"*\\ab\x00\xff"
    for _ in range(3000):
        blob = bytes(rng.choice(alphabet) for _ in range(rng.randint(0, 12)))
        try:
            decompress(blob)
        except HuffpackError:
            pass


def test_empty_input_rejected():
    with pytest.raises(EmptyInputError):
        compress(b"")


def test_truncated_header():
    with pytest.raises(TruncatedHeaderError):
        decompress(b"")
    with pytest.raises(TruncatedHeaderError):
        decompress(b"\x60")


def test_truncated_tree():
    packed = compress(b"abc")
    with pytest.raises(TruncatedTreeError):
        decompress(packed[:5])


def test_corrupt_stream_partial_code():
    packed = bytearray(compress(b"abc"))
    assert packed[0] >> 5 == 3
    packed[0] = (5 << 5) | (packed[0] & 0x1F)
    with pytest.raises(CorruptStreamError):
        decompress(bytes(packed))


def test_errors_are_value_errors():
    assert issubclass(HuffpackError, ValueError)
    with pytest.raises(ValueError):
        decompress(b"\x00")


def test_compression_stats():
    stats = compression_stats(b"abc")
    assert stats["input_bytes"] == 3
    assert stats["output_bytes"] == 8
    assert stats["symbols"] == 3
    assert stats["tree_height"] == 2
    assert stats["avg_code_length"] == pytest.approx(5 / 3)
    assert stats["entropy"] == pytest.approx(1.5849625, rel=1e-6)
    with pytest.raises(EmptyInputError):
        compression_stats(b"")


def test_compress_with_stats_returns_same_container():
    data = b"mississippi river banks" * 30
    container_bytes, stats = compress_with_stats(data)
    assert container_bytes == compress(data)
    assert stats["output_bytes"] == len(container_bytes)


def test_roundtrip_one_mebibyte():
    rng = random.Random(6)
    data = bytes(rng.choices(range(64), k=1 << 20))
    assert decompress(compress(data)) == data
