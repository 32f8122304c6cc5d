"""
Bit Packing
===========
Packs per-pixel intensities into bytes, MSB first.

    1 bpp: 8 samples per byte, sample 0 -> bit 7
    2 bpp: 4 samples per byte, sample 0 -> bits 7-6

A short final group is padded with zeros.
"""

from typing import List, Sequence

# Bit reversal table (bit 0 <-> bit 7, ...) for LSB-first consumers
_REVERSED = bytes(int(f"{i:08b}"[::-1], 2) for i in range(256))


def _check_bpp(bpp: int):
    if bpp not in (1, 2):
        raise ValueError(f"Unknown bpp {bpp} (must be 1 or 2)")


def bits_to_bytes(bits: Sequence[int], bpp: int) -> bytearray:
    """
    Pack samples into bytes.

    Args:
        bits: Samples, each in [0, 2**bpp)
        bpp: Bits per sample (1 or 2)

    Returns:
        Packed bytes

    Raises:
        ValueError: If bpp is not 1 or 2
    """
    _check_bpp(bpp)
    per_byte = 8 // bpp
    mask = (1 << bpp) - 1
    out = bytearray((len(bits) + per_byte - 1) // per_byte)
    for i, value in enumerate(bits):
        shift = 8 - bpp * (i % per_byte + 1)
        out[i // per_byte] |= (value & mask) << shift
    return out


def bytes_to_bits(data: bytes, bpp: int, count: int = None) -> List[int]:
    """
    Unpack bytes produced by bits_to_bytes().

    Args:
        data: Packed bytes
        bpp: Bits per sample used when packing
        count: Number of samples to return (default: all, padding included)

    Returns:
        List of samples
    """
    _check_bpp(bpp)
    per_byte = 8 // bpp
    mask = (1 << bpp) - 1
    bits = []
    for byte in data:
        for i in range(per_byte):
            bits.append((byte >> (8 - bpp * (i + 1))) & mask)
    if count is not None:
        bits = bits[:count]
    return bits


def reverse_bits(data: bytes) -> bytes:
    """Mirror the bit order of every byte."""
    return bytes(data).translate(_REVERSED)
