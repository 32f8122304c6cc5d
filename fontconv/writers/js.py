"""
JavaScript Writer
=================
Emits a `Graphics.prototype.setFont<Name>` function embedding the font
as a vertically scanned bitmap plus a width table.

Every glyph is re-based to (0, 0) and spans the full row height, with
columns 0..advance-1. Bits are scanned column by column (x outer, y
inner). The Font itself is left untouched.
"""

import base64
from typing import Callable, List, Optional

from .bits import bits_to_bytes

# compress(bytes) -> bytes
Compressor = Callable[[bytes], bytes]


def _atob(data) -> str:
    return base64.b64encode(bytes(data)).decode('ascii')


def _glyph_columns(font, glyph) -> List[int]:
    """Vertical scan of one glyph re-based to x=0, y=0."""
    bits = []
    for x in range(glyph.advance):
        for y in range(font.height):
            bits.append(glyph.get_pixel(glyph.x_start + x, y))
    return bits


def get_js(font, compress: Optional[Compressor] = None) -> str:
    """
    Encode a font as a JavaScript font function.

    Args:
        font: Font to encode (not modified)
        compress: Optional byte compressor; output is then wrapped in a
            heatshrink decompress call

    Returns:
        JavaScript source
    """
    if not font.glyphs:
        raise ValueError("No glyphs to write")

    codepoints = list(font.glyphs)
    char_min = min(codepoints)
    char_max = max(codepoints)

    drawn = [g for g in font.glyphs.values() if not g.is_empty]
    min_y = min((g.y_start for g in drawn), default=0)
    max_y = max((g.y_end for g in drawn), default=0)

    bits = []
    widths = [0] * (char_max + 1 - char_min)
    for ch, glyph in sorted(font.glyphs.items()):
        widths[ch - char_min] = glyph.advance
        bits.extend(_glyph_columns(font, glyph))

    font_data = bits_to_bytes(bits, font.bpp)
    if compress is not None:
        encoded = ("E.toString(require('heatshrink').decompress(atob('"
                   f"{_atob(compress(bytes(font_data)))}')))")
    else:
        encoded = f"atob('{_atob(font_data)}')"

    if all(w == widths[0] for w in widths):
        width_arg = str(widths[0])
    else:
        if max(widths) > 255:
            raise ValueError("Glyph too wide for the width table")
        width_arg = f'atob("{_atob(widths)}")'

    return (f"Graphics.prototype.setFont{font.id} = function() {{\n"
            f"  // Actual height {max_y + 1 - min_y} ({max_y} - {min_y})\n"
            f"  // {font.bpp} BPP\n"
            f"  return this.setFontCustom(\n"
            f"    {encoded},\n"
            f"    {char_min},\n"
            f"    {width_arg},\n"
            f"    {font.height}|{font.bpp << 16}\n"
            f"  );\n"
            f"}}\n")
