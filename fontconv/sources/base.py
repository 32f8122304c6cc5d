"""
FontSource - Common Interface for Pixel Sources
===============================================
Every input format implements the same small contract:

    cell_width, cell_height   size of the per-codepoint scan matrix
    sample(ch, x, y)          intensity in [0, 2**bpp), 0 outside the map

build() fills the Font. By default it scans every codepoint in the
font's ranges; formats that already carry per-glyph boxes override it
and add glyphs directly.

Note: Duck-typed base class; subclasses raise NotImplementedError for
anything they don't provide.
"""

from pathlib import Path


class FontSource:
    """
    Base class for font sources.

    Args:
        path: Source file
        font: Font to populate (its bpp and ranges are honoured)
    """

    # Default trailing padding for glyphs from this source
    GLYPH_PAD_X = 1

    def __init__(self, path: Path, font):
        self.path = Path(path)
        self.font = font
        self.cell_width = 0
        self.cell_height = 0

    @property
    def on(self) -> int:
        """Intensity used for set pixels of 1-bit sources."""
        return self.font.max_value

    def sample(self, ch: int, x: int, y: int) -> int:
        raise NotImplementedError

    def build(self):
        """Set the font's cell size and generate its glyphs."""
        font = self.font
        font.cell_width = self.cell_width
        font.cell_height = self.cell_height
        font.generate_glyphs(self.sample)
        return font
