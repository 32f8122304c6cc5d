import pytest

from fontconv.writers.bits import bits_to_bytes, bytes_to_bits, reverse_bits


def test_1bpp_msb_first():
    assert bits_to_bytes([1, 0, 0, 0, 0, 0, 0, 1], 1) == bytearray([0x81])
    assert bits_to_bytes([1, 1, 0, 1], 1) == bytearray([0xD0])


def test_1bpp_short_group_is_zero_padded():
    assert bits_to_bytes([1] * 9, 1) == bytearray([0xFF, 0x80])


def test_2bpp_sample_zero_in_top_bits():
    assert bits_to_bytes([3, 0, 1, 2], 2) == bytearray([0b11000110])
    assert bits_to_bytes([2, 1], 2) == bytearray([0b10010000])


def test_empty_input():
    assert bits_to_bytes([], 1) == bytearray()


@pytest.mark.parametrize("bpp", [0, 3, 4, 8])
def test_unknown_bpp_is_fatal(bpp):
    with pytest.raises(ValueError):
        bits_to_bytes([0, 1], bpp)


@pytest.mark.parametrize("bpp, samples", [
    (1, [1, 0, 1, 1, 0, 0, 1, 0, 1, 1, 1]),
    (2, [0, 1, 2, 3, 3, 2, 1]),
    (2, [3] * 13),
])
def test_unpack_reproduces_samples(bpp, samples):
    packed = bits_to_bytes(samples, bpp)
    assert bytes_to_bits(packed, bpp, len(samples)) == samples


def test_reverse_bits():
    assert reverse_bits(bytes([0x01, 0x80, 0xF0, 0xA5])) == bytes([0x80, 0x01, 0x0F, 0xA5])
