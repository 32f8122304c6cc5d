"""
Glyph - One Renderable Character
================================
A glyph is a cropped box inside the font's cell matrix plus the metrics
needed to place it when rendering a string.

Coordinates are inclusive and expressed in cell space:

    x_start..x_end   columns holding pixels (plus reserved padding)
    y_start..y_end   rows holding pixels

A blank glyph (space) has the explicitly empty vertical box
y_start=1, y_end=0 so that height is 0 and no rows are emitted.
"""

from typing import List

from .sampler import PixelSampler

EMPTY_Y_START = 1
EMPTY_Y_END = 0


class Glyph:
    """
    Glyph geometry and pixel access.

    Attributes:
        ch: Codepoint
        x_start, x_end: Horizontal box (inclusive)
        y_start, y_end: Vertical box (inclusive)
        advance: Cursor increment after drawing, padding included
        bpp: Bits per sample (1 or 2)
        sampler: PixelSampler answering get_pixel() in cell coordinates
    """

    def __init__(self, ch: int, sampler: PixelSampler, bpp: int = 1,
                 x_start: int = 0, x_end: int = 0,
                 y_start: int = EMPTY_Y_START, y_end: int = EMPTY_Y_END,
                 advance: int = 0):
        self.ch = ch
        self.sampler = sampler
        self.bpp = bpp
        self.x_start = x_start
        self.x_end = x_end
        self.y_start = y_start
        self.y_end = y_end
        self.advance = advance

    @property
    def width(self) -> int: return self.x_end + 1 - self.x_start

    @property
    def height(self) -> int: return self.y_end + 1 - self.y_start

    @property
    def is_empty(self) -> bool:
        return self.y_end < self.y_start

    def get_pixel(self, x: int, y: int) -> int:
        """Sample the glyph at cell coordinates (callers range-check)."""
        return self.sampler.sample(x, y)

    def wrap(self, sampler_cls, *args):
        """Replace the sampler with sampler_cls(current_sampler, *args)."""
        self.sampler = sampler_cls(self.sampler, *args)

    def get_bits(self, vertical: bool = False) -> List[int]:
        """
        Collect the samples inside the box.

        Args:
            vertical: Scan columns (x outer, y inner) instead of rows

        Returns:
            Flat list of intensities
        """
        bits = []
        if vertical:
            for x in range(self.x_start, self.x_end + 1):
                for y in range(self.y_start, self.y_end + 1):
                    bits.append(self.get_pixel(x, y))
        else:
            for y in range(self.y_start, self.y_end + 1):
                for x in range(self.x_start, self.x_end + 1):
                    bits.append(self.get_pixel(x, y))
        return bits

    def __repr__(self):
        return (f"Glyph(ch={self.ch}, x={self.x_start}..{self.x_end}, "
                f"y={self.y_start}..{self.y_end}, advance={self.advance})")
