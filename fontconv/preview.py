"""
Preview
=======
Terminal block-art dumps of a font for checking a conversion by eye.
"""

from typing import List

_MAP_1BPP = "·█"
_MAP_2BPP = "░▒▓█"


def glyph_lines(font, glyph) -> List[str]:
    """Render one glyph over the full cell height, '·' outside its box."""
    charmap = _MAP_2BPP if glyph.bpp == 2 else _MAP_1BPP
    lines = []
    for y in range(font.cell_height):
        line = ""
        for x in range(glyph.x_start, glyph.x_end + 1):
            if glyph.y_start <= y <= glyph.y_end:
                line += charmap[glyph.get_pixel(x, y)]
            else:
                line += "·"
        lines.append(line)
    return lines


def debug_chars(font, text: str = None):
    """
    Print glyphs as block art.

    Args:
        font: Font to dump
        text: Only these characters (default: every glyph)
    """
    codepoints = [ord(c) for c in text] if text else list(font.glyphs)
    print(f"\nPreview ({font.cell_width}x{font.cell_height}, {font.bpp} bpp):")
    print("-" * 40)
    for cp in codepoints:
        glyph = font.glyphs.get(cp)
        if glyph is None:
            print(f"'{chr(cp)}' (U+{cp:04X}): NOT FOUND")
            continue
        print(f"'{chr(cp)}' (U+{cp:04X}) x={glyph.x_start}..{glyph.x_end} "
              f"y={glyph.y_start}..{glyph.y_end} advance={glyph.advance}:")
        for line in glyph_lines(font, glyph):
            print(f"  {line}")
        print()


def pixels_used(font) -> List[int]:
    """Count set pixels per output row across all glyphs."""
    rows = [0] * font.height
    for glyph in font.glyphs.values():
        for x in range(glyph.x_start, glyph.x_end + 1):
            for y in range(font.height):
                if glyph.get_pixel(x, y):
                    rows[y] += 1
    return rows


def debug_pixels_used(font):
    """Print how many pixels each row uses, to spot wasted rows."""
    print("Pixels used in rows:")
    for y, count in enumerate(pixels_used(font)):
        print(f"  {y:3d}: {count}")
