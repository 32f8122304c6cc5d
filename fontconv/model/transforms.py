"""
Geometry Transforms
===================
In-place operations over every glyph of a Font. Each one changes glyph
boxes and wraps the glyph's sampler; none goes back to the pixel source.

Transforms do not commute (shift then double is not double then shift),
so they are applied in exactly the order the caller asks for.
"""

from .glyph import Glyph, EMPTY_Y_START, EMPTY_Y_END
from .sampler import ShiftSampler, ScaleSampler, SmoothScaleSampler, FunctionSampler

SPACE = 32

# Unifont "missing glyph" boxes live in a 16x16 cell
_UNIFONT_CELL = 16
_UNIFONT_SPAN = range(1, _UNIFONT_CELL - 1)


def shift_glyph_up(glyph: Glyph, n: int):
    """Move one glyph up by n rows (down if n is negative)."""
    if not glyph.is_empty:
        glyph.y_start -= n
        glyph.y_end -= n
    glyph.wrap(ShiftSampler, n)


def shift_up(font, n: int):
    """Move every glyph up by n rows."""
    if n == 0:
        return
    for glyph in font.glyphs.values():
        shift_glyph_up(glyph, n)


def nudge(font):
    """
    Shift glyphs vertically so they fit inside [0, font.height).

    Glyphs taller than the row height are reported and left alone.
    """
    height = font.height
    for ch, glyph in font.glyphs.items():
        y = min(0, glyph.y_start)
        if glyph.y_end - y >= height:
            if y != 0:
                font.warn(f"Can't nudge glyph {ch} ({glyph.y_start}..{glyph.y_end}) "
                          f"into height {height}")
                continue
            y = glyph.y_end + 1 - height
        if y != 0:
            shift_glyph_up(glyph, y)


def double_size(font, smooth: bool = False):
    """
    Scale the font 2x.

    Args:
        font: Font to scale in place
        smooth: Use edge-directed smoothing instead of nearest neighbour
    """
    font.height *= 2
    font.cell_width *= 2
    font.cell_height *= 2
    sampler_cls = SmoothScaleSampler if smooth else ScaleSampler
    for glyph in font.glyphs.values():
        glyph.x_start *= 2
        glyph.x_end = glyph.x_end * 2 + 1
        if not glyph.is_empty:
            glyph.y_start *= 2
            glyph.y_end = glyph.y_end * 2 + 1
        glyph.advance *= 2
        glyph.wrap(sampler_cls)


def add_space(font):
    """Add a blank half-cell space glyph if the font has none."""
    if SPACE in font.glyphs or not font.in_range(SPACE):
        return
    x_end = font.cell_width >> 1
    font.glyphs[SPACE] = Glyph(
        SPACE, FunctionSampler(lambda x, y: 0), bpp=font.bpp,
        x_start=0, x_end=x_end,
        y_start=EMPTY_Y_START, y_end=EMPTY_Y_END,
        advance=x_end + 1 + font.glyph_pad_x)
    print("Added space glyph")


def is_unifont_placeholder(glyph: Glyph) -> bool:
    """
    Check for GNU Unifont's missing-glyph box.

    The outermost ring of the 16x16 cell (rows/columns 0 and 15 over the
    span 1..14) must be empty, and the ring inside it (rows/columns 1 and
    14 over the same span) must be completely filled.
    """
    get = glyph.get_pixel
    outer = _UNIFONT_CELL - 1
    inner = _UNIFONT_CELL - 2
    for i in _UNIFONT_SPAN:
        if get(i, 0) or get(i, outer) or get(0, i) or get(outer, i):
            return False
        if not (get(i, 1) and get(i, inner) and get(1, i) and get(inner, i)):
            return False
    return True


def remove_unifont_placeholders(font) -> int:
    """
    Delete every placeholder glyph from a 16x16 font.

    Returns:
        Number of glyphs removed
    """
    if font.cell_width != _UNIFONT_CELL or font.cell_height != _UNIFONT_CELL:
        font.warn(f"Unifont placeholders need a {_UNIFONT_CELL}x{_UNIFONT_CELL} "
                  f"cell, font is {font.cell_width}x{font.cell_height}")
        return 0
    placeholders = [ch for ch, g in font.glyphs.items() if is_unifont_placeholder(g)]
    for ch in placeholders:
        del font.glyphs[ch]
    if placeholders:
        print(f"Removed {len(placeholders)} placeholder glyphs")
    return len(placeholders)
