import pytest

from fontconv.model import CodepointRange, Font, get_range
from fontconv.model.sampler import FunctionSampler

from conftest import A_BLOCK, A_SHAPE, build_font, bitmap_source


def test_tight_box_with_padding_column():
    font = build_font({65: A_SHAPE})
    g = font.glyphs[65]
    assert (g.x_start, g.x_end, g.y_start, g.y_end) == (1, 5, 1, 5)
    # 4 columns of pixels, one reserved column, one more for advance
    assert g.width == 5
    assert g.height == 5
    assert g.advance == 6


def test_no_padding_when_touching_right_edge():
    rows = ["......##"] * 2
    g = build_font({66: rows}).glyphs[66]
    assert (g.x_start, g.x_end) == (6, 7)
    assert g.advance == 3


def test_padding_disabled():
    g = build_font({65: A_SHAPE}, glyph_pad_x=0).glyphs[65]
    assert (g.x_start, g.x_end) == (1, 4)
    assert g.advance == 4


def test_space_is_half_width_and_empty():
    g = build_font({32: []}).glyphs[32]
    assert (g.x_start, g.x_end) == (0, 4)
    assert (g.y_start, g.y_end) == (1, 0)
    assert g.height == 0
    assert g.is_empty
    assert g.advance == 6


def test_empty_non_space_is_dropped():
    font = build_font({32: [], 33: [], 65: A_SHAPE})
    assert sorted(font.glyphs) == [32, 65]
    assert font.warnings == ["Skipped 1 empty glyphs"]


def test_fixed_width_uses_full_cell():
    font = build_font({32: [], 65: A_SHAPE}, fixed_width=True)
    a = font.glyphs[65]
    assert (a.x_start, a.x_end) == (0, 7)
    assert (a.y_start, a.y_end) == (1, 5)
    space = font.glyphs[32]
    assert (space.x_start, space.x_end) == (0, 7)
    assert (space.y_start, space.y_end) == (1, 0)


def test_full_height():
    g = build_font({65: A_SHAPE}, full_height=True).glyphs[65]
    assert (g.y_start, g.y_end) == (0, 7)


def test_box_invariants_hold_for_all_glyphs():
    bitmaps = {32: [], 65: A_SHAPE, 66: A_BLOCK, 67: ["#"], 68: ["", "", "", "", "", "", "", "#######"]}
    font = build_font(bitmaps)
    for g in font.glyphs.values():
        assert g.x_start <= g.x_end
        assert g.y_start <= g.y_end or (g.y_start, g.y_end) == (1, 0)


def test_ranges_scanned_in_order_and_later_range_wins():
    calls = []

    def source(ch, x, y):
        calls.append(ch)
        return 1 if (x, y) == (0, 0) else 0

    font = Font("t", height=2, ranges=[CodepointRange(70, 71), CodepointRange(65, 66)])
    font.cell_width = font.cell_height = 2
    font.generate_glyphs(source)
    assert list(font.glyphs) == [70, 71, 65, 66]
    seen = list(dict.fromkeys(calls))
    assert seen == [70, 71, 65, 66]


def test_overlapping_range_overwrites():
    scans = {"n": 0}

    def source(ch, x, y):
        # first scan of 65 sees A_SHAPE, the second sees A_BLOCK
        if (ch, x, y) == (65, 0, 0):
            scans["n"] += 1
        rows = A_SHAPE if scans["n"] == 1 else A_BLOCK
        return bitmap_source({65: rows})(ch, x, y)

    font = Font("t", height=8, ranges=[CodepointRange(65, 65), CodepointRange(60, 70)])
    font.cell_width = font.cell_height = 8
    font.generate_glyphs(source)
    assert scans["n"] == 2
    assert list(font.glyphs) == [65]
    assert font.glyphs[65].y_end == 6


def test_get_glyph_directly():
    font = Font("t", height=4, ranges=[CodepointRange(65, 65)])
    font.cell_width = font.cell_height = 4
    assert font.get_glyph(65, FunctionSampler(lambda x, y: 0)) is None
    g = font.get_glyph(65, FunctionSampler(lambda x, y: int(x == 2 and y == 3)))
    assert (g.x_start, g.x_end, g.y_start, g.y_end) == (2, 3, 3, 3)


def test_bad_bpp_rejected():
    with pytest.raises(ValueError):
        Font("t", bpp=3)


def test_font_id_strips_punctuation():
    assert Font("My Font-8").id == "MyFont8"
    assert Font().id == "Unknown"


def test_named_ranges():
    chinese = get_range("Chinese")
    assert [(r.min, r.max) for r in chinese] == [(32, 255), (0x4E00, 0x9FAF)]
    with pytest.raises(ValueError):
        get_range("Klingon")
