import pytest

from huffpack.frequency import count_frequencies, shannon_entropy


def test_counts_every_byte_value():
    table = count_frequencies(b"aab\x00\xff\xff")
    assert len(table) == 256
    assert table[ord("a")] == 2
    assert table[ord("b")] == 1
    assert table[0] == 1
    assert table[255] == 2
    assert sum(table) == 6


def test_empty_buffer_has_no_positive_entries():
    table = count_frequencies(b"")
    assert sum(table) == 0
    assert not any(table)


def test_accepts_bytearray_and_memoryview():
    assert count_frequencies(bytearray(b"xyz")) == count_frequencies(memoryview(b"xyz"))


def test_entropy():
    assert shannon_entropy(count_frequencies(b"abab")) == pytest.approx(1.0)
    assert shannon_entropy(count_frequencies(b"aaaa")) == 0.0
    assert shannon_entropy(count_frequencies(b"")) == 0.0
