"""
C Header Writer
===============
Packs a small fixed-width font into a C array, five glyphs per word and
one word per font row:

    cell width > 4:   6 pixel columns per glyph, uint32_t words (PACK_5_TO_32)
    cell width <= 4:  3 pixel columns per glyph, uint16_t words (PACK_5_TO_16)

Glyph n of a group lands at bit n * columns. Within a glyph the leftmost
pixel is the most significant bit, which the generated #defines spell
out (`X__` == 4, `__X` == 1).

The space glyph is skipped as it would just be zeros.
"""

from typing import List

SPACE = 32
_PACKED_CHARS = 5
_MAX_COLUMNS = 6


def _layout(font):
    if font.cell_width > _MAX_COLUMNS:
        raise ValueError(f"Cell width {font.cell_width} too wide for a packed header "
                         f"(max {_MAX_COLUMNS})")
    if font.cell_width > 4:
        return "PACK_5_TO_32", 6, "uint32_t"
    return "PACK_5_TO_16", 3, "uint16_t"


def _glyph_rows(font, ch: int, columns: int) -> List[str]:
    glyph = font.glyphs.get(ch)
    rows = []
    for y in range(font.cell_height):
        row = ""
        for x in range(columns):
            on = glyph is not None and x < font.cell_width and glyph.get_pixel(x, y)
            row += "X" if on else "_"
        rows.append(row)
    return rows


def _pattern_defines(columns: int) -> str:
    lines = []
    for value in range(1 << columns):
        pattern = f"{value:0{columns}b}".replace("0", "_").replace("1", "X")
        lines.append(f"#define {pattern} {value}")
    return "\n".join(lines)


def get_header_file(font) -> str:
    """
    Encode a fixed-width font as a C header.

    Returns:
        C source text
    """
    if not font.glyphs:
        raise ValueError("No glyphs to write")

    pack_define, columns, storage = _layout(font)
    name = f"{font.cell_width}X{font.cell_height}"

    first = min(font.glyphs)
    last = max(font.glyphs)
    if first == SPACE:
        first += 1

    body = ""
    ch = first
    while ch <= last:
        glyphs = [_glyph_rows(font, ch + i, columns) for i in range(_PACKED_CHARS)]
        ch += _PACKED_CHARS
        for y in range(font.cell_height):
            body += f"  {pack_define}( {' , '.join(g[y] for g in glyphs)} ),\n"
        body += "\n"

    shifts = " | ".join(
        f"(({arg}) << {i * columns})" for i, arg in enumerate("ABCDE"))
    return (f"// {font.cell_width}x{font.cell_height} fixed width font\n"
            f"#include <stdint.h>\n\n"
            f"{_pattern_defines(columns)}\n\n"
            f"#define {pack_define}(A,B,C,D,E) ({shifts})\n\n"
            f"#define LCD_FONT_{name}_FIRST_CHAR {first}\n"
            f"#define LCD_FONT_{name}_LAST_CHAR {last}\n\n"
            f"const {storage} LCD_FONT_{name}[] = {{ // from {first} up to {last}\n"
            f"{body}"
            f"}};\n")
