import pytest

from fontconv.model import CodepointRange, Font

# Character -> intensity in test bitmaps
_LEVELS = {"#": None, "1": 1, "2": 2, "3": 3}


def bitmap_source(bitmaps, bpp=1):
    """
    Build a (ch, x, y) source from {ch: [row strings]}.

    '#' is full intensity, digits are explicit levels, anything else is 0.
    """
    full = (1 << bpp) - 1

    def source(ch, x, y):
        rows = bitmaps.get(ch)
        if not rows or not 0 <= y < len(rows) or not 0 <= x < len(rows[y]):
            return 0
        c = rows[y][x]
        if c not in _LEVELS:
            return 0
        return full if _LEVELS[c] is None else _LEVELS[c]

    return source


def build_font(bitmaps, cell=(8, 8), height=None, bpp=1, ranges=None, **kwargs):
    """Create a Font from test bitmaps, one range per codepoint by default."""
    if ranges is None:
        ranges = [CodepointRange(ch, ch) for ch in sorted(bitmaps)]
    font = Font("Test Font", height=height or cell[1], bpp=bpp, ranges=ranges, **kwargs)
    font.cell_width, font.cell_height = cell
    font.generate_glyphs(bitmap_source(bitmaps, bpp))
    return font


# 'A' filled in the 5x6 interior box x=1..5, y=1..6 of an 8x8 cell
A_BLOCK = [
    "........",
    ".#####..",
    ".#####..",
    ".#####..",
    ".#####..",
    ".#####..",
    ".#####..",
    "........",
]

A_SHAPE = [
    "........",
    "..##....",
    ".#..#...",
    ".####...",
    ".#..#...",
    ".#..#...",
    "........",
    "........",
]


@pytest.fixture
def make_font():
    return build_font


@pytest.fixture
def space_and_a():
    """Two-glyph font: space and a solid 'A' block, 8x8 cell, 1bpp."""
    return build_font({32: [], 65: A_BLOCK}, cell=(8, 8), height=8)


def unifont_placeholder_rows():
    """16x16 Unifont-style missing-glyph box with some digits inside."""
    rows = [[" "] * 16 for _ in range(16)]
    for i in range(1, 15):
        rows[1][i] = rows[14][i] = "#"
        rows[i][1] = rows[i][14] = "#"
    for x, y in ((4, 4), (5, 4), (4, 5), (10, 10), (11, 11)):
        rows[y][x] = "#"
    return ["".join(r) for r in rows]
