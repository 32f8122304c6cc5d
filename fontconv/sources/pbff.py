"""
PBFF Source
===========
Pebble's text font format (as used by the renaissance fonts):

    version 1
    fallback 9647
    line-height 14
    glyph 65 A
    ------ 2        <- dash line: one dash per advance column, then the
     ##                number of blank rows above the glyph
    #  #
    -               <- end of glyph

'#' is a set pixel, anything else is clear. Malformed lines are reported
through the font's warnings and skipped.
"""

from typing import Dict, List, Optional

from .base import FontSource


class PBFFSource(FontSource):
    """Load a PBFF text font."""

    GLYPH_PAD_X = 0

    def __init__(self, path, font):
        super().__init__(path, font)
        self.line_height = None
        self.bitmaps: Dict[int, List[str]] = {}
        self.advances: Dict[int, int] = {}
        self.cell_height = font.height or 0
        with open(self.path, 'r', encoding='utf-8') as f:
            self._parse(f.read())

    def _number(self, line: str) -> Optional[int]:
        """Second field of a line as an int, or None after a warning."""
        try:
            return int(line.split()[1])
        except (IndexError, ValueError):
            self.font.warn(f"Unknown line '{line}'")
            return None

    def _parse(self, text: str):
        current = []
        ch = None
        for line in text.split("\n"):
            line = line.rstrip("\r")
            if line.startswith(("version", "fallback")):
                continue
            elif line.startswith("line-height"):
                height = self._number(line)
                if height is not None:
                    self.line_height = height
            elif line.startswith("glyph"):
                ch = self._number(line)
                current = []
                if ch is not None:
                    self.bitmaps[ch] = current
            elif line.strip().startswith("-"):
                if line == "-":
                    ch = None  # end of glyph
                    continue
                if ch is None:
                    continue
                parts = line.split()
                self.advances[ch] = len(parts[0])
                if len(parts) < 2:
                    continue
                pad = self._number(line)
                if pad is not None:
                    current.extend([""] * max(pad, 0))
            elif line == "" or line.startswith((" ", "#")):
                if ch is None:
                    continue
                current.append(line)
                self.cell_width = max(self.cell_width, len(line))
                if len(current) > self.cell_height:
                    self.cell_height = len(current)
            else:
                self.font.warn(f"Unknown line '{line}'")

        if self.font.height is None and self.line_height:
            self.font.height = self.line_height

    def sample(self, ch: int, x: int, y: int) -> int:
        rows = self.bitmaps.get(ch)
        if not rows or not 0 <= y < len(rows):
            return 0
        row = rows[y]
        return self.on if 0 <= x < len(row) and row[x] == "#" else 0

    def build(self):
        """Scan the bitmaps, then apply the advances from the dash lines."""
        font = super().build()
        if font.fixed_width:
            return font
        for ch, glyph in font.glyphs.items():
            advance = self.advances.get(ch)
            if advance is None:
                continue
            if glyph.is_empty:
                glyph.x_end = max(advance - 1, 0)
            glyph.advance = advance
        return font
