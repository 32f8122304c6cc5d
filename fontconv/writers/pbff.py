"""
PBFF Writer
===========
Text glyph-art output, readable again by the PBFF source:

    version 1
    fallback 9647
    line-height 16
    glyph 65 A
    ------ 3
     ##
    #  #
    ...
    -

The dash count is the advance; the number after it is y_start.
"""

SPACE = 32
_FALLBACK = 9647  # U+25AF white vertical rectangle


def _glyph_label(ch: int) -> str:
    c = chr(ch)
    return c if c.isprintable() and ch != SPACE else ""


def get_pbff(font) -> str:
    """Encode a font as PBFF text."""
    lines = ["version 1", f"fallback {_FALLBACK}", f"line-height {font.height}"]
    for ch, glyph in font.glyphs.items():
        lines.append(f"glyph {ch} {_glyph_label(ch)}".rstrip())
        top = 0 if glyph.is_empty else glyph.y_start
        lines.append(f"{'-' * max(glyph.advance, 1)} {top}")
        for y in range(glyph.y_start, glyph.y_end + 1):
            row = "".join("#" if glyph.get_pixel(x, y) else " "
                          for x in range(glyph.x_end + 1))
            lines.append(row.rstrip())
        lines.append("-")
    return "\n".join(lines) + "\n"
