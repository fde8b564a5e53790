import pytest

from huffpack.bits import BitPacker, unpack_bits


def test_packer_emits_byte_every_eight_bits():
    packer = BitPacker()
    emitted = [packer.push(bit) for bit in (1, 0, 1, 1, 0, 0, 1, 0)]
    assert emitted[:7] == [None] * 7
    assert emitted[7] == 0b10110010
    assert packer.flush() is None


def test_packer_flush_pads_low_bits():
    packer = BitPacker()
    for bit in (1, 0, 1):
        packer.push(bit)
    assert packer.flush() == 0b10100000
    assert packer.flush() is None


def test_packer_rejects_non_bits():
    with pytest.raises(ValueError):
        BitPacker().push(2)


def test_unpack_bits_msb_first():
    assert list(unpack_bits(0b10110001)) == [1, 0, 1, 1, 0, 0, 0, 1]


def test_unpack_bits_limited_to_meaningful_prefix():
    assert list(unpack_bits(0b10110000, 4)) == [1, 0, 1, 1]
    assert list(unpack_bits(0xFF, 0)) == []


def test_unpack_bits_validates_arguments():
    with pytest.raises(ValueError):
        list(unpack_bits(256))
    with pytest.raises(ValueError):
        list(unpack_bits(1, 9))


def test_push_code_emits_whole_bytes_and_keeps_remainder():
    packer = BitPacker()
    assert packer.push_code(0b101, 3) == b""
    assert packer.push_code(0b1100110011, 10) == bytes([0b10111001])
    assert packer.push_code(0, 0) == b""
    assert packer.flush() == 0b10011000


def test_push_code_wide_value():
    packer = BitPacker()
    assert packer.push_code(0xABCDEF, 24) == b"\xab\xcd\xef"
    assert packer.flush() is None


def test_push_code_rejects_value_wider_than_length():
    with pytest.raises(ValueError):
        BitPacker().push_code(0b100, 2)
