"""
PBF Font Reader
===============
Parses PBF files the way the embedded runtime does: hash the codepoint
into a bucket, scan that bucket's slice of the offset table, then decode
the glyph record it points to.

Format Layout:
    [Header: 8 bytes (v2) or header length (v3)]
    [Hash table: hashtable_size * 4 bytes]
    [Offset table: count * entry_size bytes]
    [Glyph data: variable]
"""

import io
import struct
from typing import List, Optional

from ..writers.bits import bytes_to_bits, reverse_bits
from ..writers.pbf import (FEATURE_16BIT_OFFSETS, FEATURE_EXTENDED_HASH_OFFSETS,
                           FLAG_2BPP, PBF_GLYPH_HEADER_SIZE, PBF_HASH_ENTRY_SIZE,
                           PBF_V2_HEADER_SIZE)


class PBFGlyph:
    """
    One decoded glyph record.

    Attributes:
        ch: Codepoint
        width, height: Box size in pixels
        left, top: Box offset inside the cell
        advance: Cursor increment
        bpp: Bits per pixel of the stored data (1 or 2)
        pixels: Row-major samples, width * height entries
    """

    def __init__(self, ch: int, width: int, height: int, left: int, top: int,
                 advance: int, bpp: int, pixels: List[int]):
        self.ch = ch
        self.width = width
        self.height = height
        self.left = left
        self.top = top
        self.advance = advance
        self.bpp = bpp
        self.pixels = pixels

    def get_pixel(self, x: int, y: int) -> int:
        """Pixel at box-relative (x, y)."""
        return self.pixels[y * self.width + x]

    def __repr__(self):
        return (f"PBFGlyph(ch={self.ch}, {self.width}x{self.height} "
                f"at ({self.left},{self.top}), advance={self.advance}, bpp={self.bpp})")


class PBFFont:
    """
    PBF font reader.

    Args:
        source: Path to a .pbf file, or the file contents as bytes

    Attributes:
        version: Format version
        height: Line height in pixels
        count: Number of glyphs
        hashtable_size: Number of hash buckets
        offsets_16bit: True if data offsets are 2 bytes
        extended_hash_offsets: True if hash table offsets are 24-bit

    Raises:
        ValueError: If the data is not a valid PBF font
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray)):
            self.file = io.BytesIO(bytes(source))
        else:
            self.file = open(source, "rb")

        hdr = self.file.read(PBF_V2_HEADER_SIZE)
        if len(hdr) < PBF_V2_HEADER_SIZE:
            self.file.close()
            raise ValueError("Invalid PBF font file")
        (self.version, self.height, self.count, self.wildcard,
         self.hashtable_size, self.codepoint_size) = struct.unpack("<BBHHBB", hdr)

        features = 0
        self.header_size = PBF_V2_HEADER_SIZE
        if self.version >= 3:
            self.header_size, features = struct.unpack("<BB", self.file.read(2))
        elif self.version != 2:
            self.file.close()
            raise ValueError(f"Unsupported PBF version {self.version}")
        if self.codepoint_size != 2:
            self.file.close()
            raise ValueError(f"Unsupported codepoint size {self.codepoint_size}")

        self.offsets_16bit = bool(features & FEATURE_16BIT_OFFSETS)
        self.extended_hash_offsets = bool(features & FEATURE_EXTENDED_HASH_OFFSETS)
        self.entry_size = 4 if self.offsets_16bit else 6

        self._hash_start = self.header_size
        self._offsets_start = self._hash_start + self.hashtable_size * PBF_HASH_ENTRY_SIZE
        self._data_start = self._offsets_start + self.count * self.entry_size

        # Hash table is small enough to keep in memory
        self.file.seek(self._hash_start)
        table = self.file.read(self.hashtable_size * PBF_HASH_ENTRY_SIZE)
        self.buckets = []
        for i in range(self.hashtable_size):
            first, count, offset = struct.unpack_from("<BBH", table, i * PBF_HASH_ENTRY_SIZE)
            if self.extended_hash_offsets:
                offset |= first << 16
            self.buckets.append((count, offset))

    def find(self, cp: int) -> Optional[int]:
        """
        Look up a codepoint.

        Args:
            cp: Unicode codepoint

        Returns:
            Offset of the glyph record in the data section, or None
        """
        count, offset = self.buckets[cp % self.hashtable_size]
        self.file.seek(self._offsets_start + offset)
        entries = self.file.read(count * self.entry_size)
        fmt = "<HH" if self.offsets_16bit else "<HI"
        for i in range(count):
            entry_cp, data_offset = struct.unpack_from(fmt, entries, i * self.entry_size)
            if entry_cp == cp:
                return data_offset
        return None

    def codepoints(self) -> List[int]:
        """All codepoints in offset table order."""
        self.file.seek(self._offsets_start)
        entries = self.file.read(self.count * self.entry_size)
        return [struct.unpack_from("<H", entries, i * self.entry_size)[0]
                for i in range(self.count)]

    def get(self, cp: int) -> Optional[PBFGlyph]:
        """
        Decode the glyph for a codepoint.

        Returns:
            PBFGlyph, or None if the font has no such glyph
        """
        data_offset = self.find(cp)
        if data_offset is None:
            return None
        self.file.seek(self._data_start + data_offset)
        width, height, left, top, advance = struct.unpack(
            "<BBbbB", self.file.read(PBF_GLYPH_HEADER_SIZE))
        bpp = 2 if advance & FLAG_2BPP else 1
        advance &= 0x7F
        count = width * height
        packed = self.file.read((count * bpp + 7) >> 3)
        pixels = bytes_to_bits(reverse_bits(packed), bpp, count)
        return PBFGlyph(cp, width, height, left, top, advance, bpp, pixels)

    def close(self):
        """Close the underlying file."""
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False
