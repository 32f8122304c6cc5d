import struct

import pytest

from fontconv.decode import PBFFont
from fontconv.model import CodepointRange, Font, Glyph
from fontconv.model.sampler import FunctionSampler
from fontconv.writers.pbf import (FEATURE_16BIT_OFFSETS, FEATURE_EXTENDED_HASH_OFFSETS,
                                  encode_glyph_bits, get_pbf, needs_extended_hash_offsets,
                                  offset_table_span, write_pbf)

from conftest import A_SHAPE


def dot_font(count, first=0x100, cell=2):
    """Font with `count` 1x1 glyphs, built without scanning."""
    font = Font("dots", height=cell, ranges=[CodepointRange(first, first + count - 1)])
    font.cell_width = font.cell_height = cell
    sampler = FunctionSampler(lambda x, y: 1 if (x, y) == (0, 0) else 0)
    for ch in range(first, first + count):
        font.add_glyph(Glyph(ch, sampler, x_start=0, x_end=0, y_start=0, y_end=0, advance=2))
    return font


def expected_length(font, header_size, buckets, entry_size):
    data = 0
    for g in font.glyphs.values():
        if g.is_empty:
            data += 5
        else:
            bpp = font.bpp
            bits = g.get_bits()
            if bpp == 2 and not any(b in (1, 2) for b in bits):
                bpp = 1
            data += 5 + (len(bits) * bpp + 7) // 8
    return header_size + 4 * buckets + entry_size * len(font.glyphs) + data


class TestSpaceAndA:
    def test_header(self, space_and_a):
        data = get_pbf(space_and_a)
        version, height, count, wildcard, buckets, cp_size, hdr_len, features = \
            struct.unpack_from("<BBHHBBBB", data)
        assert (version, height, count, wildcard) == (3, 8, 2, 0)
        assert (buckets, cp_size, hdr_len) == (255, 2, 10)
        assert features == FEATURE_16BIT_OFFSETS

    def test_round_trip(self, space_and_a):
        font = space_and_a
        a = font.glyphs[65]
        with PBFFont(get_pbf(font)) as pbf:
            assert pbf.count == 2
            decoded = pbf.get(65)
            assert (decoded.width, decoded.height) == (a.width, a.height) == (6, 6)
            assert (decoded.left, decoded.top) == (a.x_start, a.y_start) == (1, 1)
            assert decoded.advance == a.advance == 7
            assert decoded.bpp == 1
            for y in range(decoded.height):
                for x in range(decoded.width):
                    assert decoded.get_pixel(x, y) == a.get_pixel(a.x_start + x, a.y_start + y)

            space = pbf.get(32)
            assert (space.width, space.height) == (0, 0)
            assert space.pixels == []
            assert space.advance == font.cell_width // 2 + 1 + font.glyph_pad_x

            assert pbf.get(66) is None

    def test_exact_bytes(self, space_and_a):
        data = get_pbf(space_and_a, hashtable_size=2)
        assert data[:10] == bytes([3, 8, 2, 0, 0, 0, 2, 2, 10, FEATURE_16BIT_OFFSETS])
        # 32 % 2 == 0 and 65 % 2 == 1
        assert data[10:18] == bytes([0, 1, 0, 0, 1, 1, 4, 0])
        # offset table: space at 0, 'A' after the space's 5-byte record
        assert data[18:26] == bytes([32, 0, 0, 0, 65, 0, 5, 0])
        assert data[26:31] == bytes([0, 0, 0, 0, 6])
        assert data[31:36] == bytes([6, 6, 1, 1, 7])
        # six rows of '#####.' packed MSB first are 0xFB 0xEF 0xBE 0xFB 0xE0,
        # each byte then bit-reversed
        assert data[36:] == bytes([0xDF, 0xF7, 0x7D, 0xDF, 0x07])

    def test_length(self, space_and_a):
        data = get_pbf(space_and_a)
        assert len(data) == expected_length(space_and_a, 10, 255, 4)


class TestLayout:
    def test_every_codepoint_found_exactly_once(self):
        font = dot_font(300)
        data = get_pbf(font, hashtable_size=7)
        pbf = PBFFont(data)
        codepoints = pbf.codepoints()
        assert sorted(codepoints) == sorted(font.glyphs)
        for ch in font.glyphs:
            count, offset = pbf.buckets[ch % 7]
            entries = data[pbf._offsets_start + offset:
                           pbf._offsets_start + offset + count * pbf.entry_size]
            matches = [i for i in range(count)
                       if struct.unpack_from("<H", entries, i * pbf.entry_size)[0] == ch]
            assert len(matches) == 1
            assert pbf.get(ch).advance == 2

    def test_offset_table_grouped_by_bucket(self):
        font = dot_font(10, first=100)
        pbf = PBFFont(get_pbf(font, hashtable_size=3))
        assert pbf.codepoints() == [102, 105, 108, 100, 103, 106, 109, 101, 104, 107]

    def test_length_with_mixed_glyphs(self, make_font):
        font = make_font({32: [], 65: A_SHAPE, 66: ["#"], 67: ["", "  ##", " #  #"]})
        data = get_pbf(font, hashtable_size=16)
        assert len(data) == expected_length(font, 10, 16, 4)

    def test_version_2(self, space_and_a):
        data = get_pbf(space_and_a, version=2)
        assert data[0] == 2
        assert len(data) == expected_length(space_and_a, 8, 64, 6)
        pbf = PBFFont(data)
        assert not pbf.offsets_16bit
        assert pbf.get(65).width == 6

    def test_32bit_offsets_when_requested(self, space_and_a):
        data = get_pbf(space_and_a, offsets_16bit=False)
        assert data[9] == 0
        assert len(data) == expected_length(space_and_a, 10, 255, 6)
        assert PBFFont(data).get(65).advance == 7


class TestTwoBitGlyphs:
    def test_demoted_when_only_on_and_off(self, make_font):
        font = make_font({65: A_SHAPE}, bpp=2)
        pbf = PBFFont(get_pbf(font))
        g = pbf.get(65)
        assert g.bpp == 1
        assert g.get_pixel(1, 0) == 1

    def test_kept_with_grey_levels(self, make_font):
        font = make_font({65: ["", " 3210", " 1223"]}, bpp=2)
        data = get_pbf(font)
        pbf = PBFFont(data)
        g = pbf.get(65)
        assert g.bpp == 2
        assert g.advance == font.glyphs[65].advance
        assert g.pixels[:4] == [3, 2, 1, 0]
        assert len(data) == expected_length(font, 10, 255, 4)

    def test_uses_glyph_bpp(self):
        grey = Glyph(65, FunctionSampler(lambda x, y: 2), bpp=2, x_start=0, x_end=1,
                     y_start=0, y_end=0, advance=2)
        assert encode_glyph_bits(grey) == (2, [2, 2])
        solid = Glyph(66, FunctionSampler(lambda x, y: 3), bpp=2, x_start=0, x_end=1,
                      y_start=0, y_end=0, advance=2)
        assert encode_glyph_bits(solid) == (1, [1, 1])
        plain = Glyph(67, FunctionSampler(lambda x, y: 1), x_start=0, x_end=0,
                      y_start=0, y_end=0, advance=1)
        assert encode_glyph_bits(plain) == (1, [1])

    def test_demotion_is_per_glyph(self, make_font):
        font = make_font({65: ["#"], 66: ["2"]}, bpp=2)
        pbf = PBFFont(get_pbf(font))
        assert pbf.get(65).bpp == 1
        assert pbf.get(66).bpp == 2


class TestFeatures:
    def test_extended_offset_boundary(self):
        assert not needs_extended_hash_offsets(65535)
        assert needs_extended_hash_offsets(65536)

    def test_1100_glyphs_need_no_extension(self):
        font = dot_font(1100)
        assert offset_table_span(1100) == 6600
        data = get_pbf(font, hashtable_size=255)
        assert not data[9] & FEATURE_EXTENDED_HASH_OFFSETS
        assert PBFFont(data).get(0x100 + 1099) is not None

    def test_extended_offsets_selected_above_boundary(self):
        count = 65536 // 6 + 1
        assert offset_table_span(count) > 65535
        assert not needs_extended_hash_offsets(offset_table_span(count - 1))
        font = dot_font(count)
        data = get_pbf(font, hashtable_size=255)
        assert data[9] & FEATURE_EXTENDED_HASH_OFFSETS
        pbf = PBFFont(data)
        assert pbf.extended_hash_offsets
        for ch in (0x100, 0x100 + count // 2, 0x100 + count - 1):
            assert pbf.get(ch).width == 1

    def test_version_2_rejects_16bit_offsets(self, space_and_a):
        with pytest.raises(ValueError):
            get_pbf(space_and_a, version=2, offsets_16bit=True)

    def test_version_2_rejects_extended_offsets(self):
        with pytest.raises(ValueError):
            get_pbf(dot_font(65536 // 6 + 1), version=2)

    def test_unknown_version(self, space_and_a):
        with pytest.raises(ValueError):
            get_pbf(space_and_a, version=4)

    def test_bucket_overflow(self):
        font = dot_font(256)
        with pytest.raises(ValueError, match="hash bucket"):
            get_pbf(font, hashtable_size=1)
        get_pbf(dot_font(255), hashtable_size=1)


def test_write_pbf(tmp_path, space_and_a):
    path = tmp_path / "font.pbf"
    data = write_pbf(space_and_a, path)
    assert path.read_bytes() == data
    with PBFFont(path) as pbf:
        assert pbf.height == 8
