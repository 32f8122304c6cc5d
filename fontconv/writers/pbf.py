"""
PBF Writer
==========
Writes fonts in the hash-indexed PBF binary format used by the embedded
runtime (derived from the Pebble firmware font format).

Format Layout:
    [Header: 8 bytes (v2) or 10 bytes (v3)]
    [Hash table: hashtable_size * 4 bytes]
    [Offset table: glyph_count * (4 or 6) bytes]
    [Glyph data: variable]

Header Structure:
    - Version: 1 byte
    - Line height: 1 byte
    - Glyph count: 2 bytes (little-endian)
    - Wildcard codepoint: 2 bytes (little-endian, always 0)
    - Hash table size: 1 byte
    - Codepoint size: 1 byte (always 2)
    v3 only:
    - Header length: 1 byte
    - Features: 1 byte (bit 0: 16-bit data offsets,
                        bit 7: 24-bit hash table offsets)

Hash table entry (4 bytes):
    - Bucket index, or bits 16-23 of the offset with 24-bit offsets
    - Glyph count in bucket: 1 byte
    - Offset into offset table: 2 bytes (little-endian)

Offset table entry (4 or 6 bytes), grouped by bucket:
    - Codepoint: 2 bytes (little-endian)
    - Offset into glyph data: 2 or 4 bytes (little-endian)

Glyph data:
    - width, height: 1 byte each
    - left, top: 1 signed byte each
    - advance: 1 byte, bit 7 set for 2bpp glyphs
    - pixels: row-major, packed MSB first then bit-reversed per byte
"""

import struct
from pathlib import Path
from typing import List, Optional, Tuple

from .bits import bits_to_bytes, reverse_bits

PBF_VERSION = 3
PBF_V2_HEADER_SIZE = 8
PBF_V3_HEADER_SIZE = 10
PBF_CODEPOINT_SIZE = 2
PBF_GLYPH_HEADER_SIZE = 5
PBF_HASH_ENTRY_SIZE = 4

FEATURE_16BIT_OFFSETS = 0x01
FEATURE_EXTENDED_HASH_OFFSETS = 0x80

FLAG_2BPP = 0x80

# Offset table entry size assumed when deciding on 24-bit hash offsets
_LEGACY_ENTRY_SIZE = 6

_DEFAULT_HASHTABLE_SIZE = {2: 64, 3: 255}


def offset_table_span(glyph_count: int) -> int:
    """Offset table size in bytes with 32-bit data offsets."""
    return _LEGACY_ENTRY_SIZE * glyph_count


def needs_extended_hash_offsets(span: int) -> bool:
    """True if an offset table of `span` bytes can't be addressed with 16 bits."""
    return span > 0xFFFF


def encode_glyph_bits(glyph) -> Tuple[int, List[int]]:
    """
    Sample a glyph for PBF output at its own bpp.

    A 2bpp glyph using only full-off and full-on samples is stored at
    1bpp instead.

    Returns:
        (bpp, samples) tuple
    """
    bpp = glyph.bpp
    bits = glyph.get_bits()
    if bpp == 2 and not any(b == 1 or b == 2 for b in bits):
        bpp = 1
        bits = [b >> 1 for b in bits]
    return bpp, bits


def _glyph_record(glyph, bpp: int, bits: List[int]) -> bytes:
    if glyph.is_empty:
        width = height = left = top = 0
    else:
        width, height = glyph.width, glyph.height
        left, top = glyph.x_start, glyph.y_start

    if not (0 <= width <= 255 and 0 <= height <= 255):
        raise ValueError(f"Glyph {glyph.ch} is too big ({width}x{height})")
    if not (-128 <= left <= 127 and -128 <= top <= 127):
        raise ValueError(f"Glyph {glyph.ch} offset ({left},{top}) out of range")
    if not 0 <= glyph.advance <= 127:
        raise ValueError(f"Glyph {glyph.ch} advance {glyph.advance} out of range")

    advance = glyph.advance | (FLAG_2BPP if bpp == 2 else 0)
    header = struct.pack('<BBbbB', width, height, left, top, advance)
    return header + reverse_bits(bits_to_bytes(bits, bpp))


def get_pbf(font, version: int = PBF_VERSION,
            hashtable_size: Optional[int] = None,
            offsets_16bit: Optional[bool] = None) -> bytes:
    """
    Encode a font as PBF.

    Args:
        font: Font to encode (not modified)
        version: Format version, 2 or 3
        hashtable_size: Number of hash buckets (1-255, default per version)
        offsets_16bit: Force 16-bit data offsets on/off (None = automatic,
            only used by version 3)

    Returns:
        PBF file contents

    Raises:
        ValueError: On an unsupported version/feature combination or when
            a hash bucket holds more than 255 glyphs
    """
    if version not in (2, 3):
        raise ValueError(f"Unsupported PBF version {version}")
    if hashtable_size is None:
        hashtable_size = _DEFAULT_HASHTABLE_SIZE[version]
    if not 1 <= hashtable_size <= 255:
        raise ValueError(f"Hash table size {hashtable_size} must be 1-255")
    if not 0 <= font.height <= 255:
        raise ValueError(f"Font height {font.height} doesn't fit in a byte")

    glyph_count = len(font.glyphs)
    if glyph_count > 0xFFFF:
        raise ValueError(f"Too many glyphs ({glyph_count})")

    # Glyph data, in font order
    buckets = [[] for _ in range(hashtable_size)]
    glyph_data = bytearray()
    max_offset = 0
    for ch, glyph in font.glyphs.items():
        if not 0 <= ch <= 0xFFFF:
            raise ValueError(f"Codepoint {ch} doesn't fit in {PBF_CODEPOINT_SIZE} bytes")
        glyph_bpp, bits = encode_glyph_bits(glyph)
        offset = len(glyph_data)
        max_offset = offset
        glyph_data.extend(_glyph_record(glyph, glyph_bpp, bits))
        buckets[ch % hashtable_size].append((ch, offset))

    extended = needs_extended_hash_offsets(offset_table_span(glyph_count))
    fits_16bit = max_offset <= 0xFFFF
    if offsets_16bit is None:
        offsets_16bit = fits_16bit and version >= 3
    elif offsets_16bit and not fits_16bit:
        raise ValueError(f"Glyph data offset {max_offset} doesn't fit in 16 bits")

    if version == 2 and (offsets_16bit or extended):
        raise ValueError("PBF version 2 supports neither 16-bit offsets "
                         "nor extended hash table offsets")

    # Header
    header = struct.pack('<BBHHBB', version, font.height, glyph_count, 0,
                         hashtable_size, PBF_CODEPOINT_SIZE)
    if version >= 3:
        features = ((FEATURE_16BIT_OFFSETS if offsets_16bit else 0) |
                    (FEATURE_EXTENDED_HASH_OFFSETS if extended else 0))
        header += struct.pack('<BB', PBF_V3_HEADER_SIZE, features)

    # Hash table and offset table
    entry_format = '<HH' if offsets_16bit else '<HI'
    hash_table = bytearray()
    offset_table = bytearray()
    for index, bucket in enumerate(buckets):
        if len(bucket) > 255:
            raise ValueError(f"Too many glyphs ({len(bucket)}) in hash bucket {index}")
        table_offset = len(offset_table)
        if not extended and table_offset > 0xFFFF:
            raise ValueError("Offset table too large for 16-bit hash offsets")
        first = (table_offset >> 16) if extended else index
        hash_table += struct.pack('<BBH', first, len(bucket), table_offset & 0xFFFF)
        for ch, offset in bucket:
            offset_table += struct.pack(entry_format, ch, offset)

    return bytes(header + hash_table + offset_table + glyph_data)


def write_pbf(font, output_path: Path, **options):
    """Encode a font as PBF and write it to a file."""
    output_path = Path(output_path)
    data = get_pbf(font, **options)
    output_path.write_bytes(data)
    print(f"Created: {output_path} ({len(data) / 1024:.1f} KB, "
          f"{len(font.glyphs)} glyphs)")
    return data
