"""
Font - Glyph Collection and Generation
======================================
The Font owns every glyph and the parameters shared between them. It is
built empty, filled once by scanning a pixel source over its codepoint
ranges, and afterwards only modified by the geometry transforms.

Usage:
    font = Font("Test", height=8, ranges=get_range("ASCII"))
    font.cell_width, font.cell_height = 8, 8
    font.generate_glyphs(lambda ch, x, y: ...)
"""

import re
from typing import Callable, Dict, List, Optional

from .glyph import Glyph, EMPTY_Y_START, EMPTY_Y_END
from .ranges import CodepointRange, get_range, DEFAULT_RANGE
from .sampler import PixelSampler, SourceSampler
from . import transforms

SPACE = 32

# (ch, x, y) -> intensity
PixelSource = Callable[[int, int, int], int]


class Font:
    """
    Bitmap font model.

    Args:
        name: Font name (used to derive identifiers in generated code)
        height: Nominal output row height (defaults to the cell height)
        bpp: Bits per pixel, 1 or 2
        ranges: Ordered list of CodepointRange to scan
        fixed_width: Force every glyph to the full cell width
        full_height: Force every glyph to the full cell height
        glyph_pad_x: Trailing columns reserved after narrow glyphs (0 or 1)

    Attributes:
        cell_width, cell_height: Scan matrix size, set by the source
        glyphs: Dict of {codepoint: Glyph} in generation order
        warnings: Diagnostics recorded while loading and transforming
    """

    def __init__(self, name: str = None, height: int = None, bpp: int = 1,
                 ranges: Optional[List[CodepointRange]] = None,
                 fixed_width: bool = False, full_height: bool = False,
                 glyph_pad_x: int = 1):
        if bpp not in (1, 2):
            raise ValueError(f"Unknown bpp {bpp} (must be 1 or 2)")
        if glyph_pad_x not in (0, 1):
            raise ValueError("glyph_pad_x must be 0 or 1")

        self.name = name
        self.height = height
        self.bpp = bpp
        self.ranges = list(ranges) if ranges else get_range(DEFAULT_RANGE)
        self.fixed_width = fixed_width
        self.full_height = full_height
        self.glyph_pad_x = glyph_pad_x
        self.cell_width = 0
        self.cell_height = 0
        self.glyphs: Dict[int, Glyph] = {}
        self.warnings: List[str] = []

    @property
    def id(self) -> str:
        """Name reduced to characters valid in an identifier."""
        return re.sub(r"[^A-Za-z0-9]", "", self.name) if self.name else "Unknown"

    @property
    def max_value(self) -> int:
        """Full intensity at this font's bpp."""
        return (1 << self.bpp) - 1

    @property
    def first_char(self) -> int:
        return min(r.min for r in self.ranges)

    @property
    def last_char(self) -> int:
        return max(r.max for r in self.ranges)

    def in_range(self, ch: int) -> bool:
        return any(ch in r for r in self.ranges)

    def warn(self, message: str):
        """Record a recoverable problem and report it."""
        self.warnings.append(message)
        print(f"Warning: {message}")

    # =========================================================================
    # Glyph Generation
    # =========================================================================

    def get_glyph(self, ch: int, sampler: PixelSampler) -> Optional[Glyph]:
        """
        Work out the bounding box of one codepoint.

        Args:
            ch: Codepoint
            sampler: Pixel sampler over the cell matrix

        Returns:
            Glyph, or None if the cell is empty and ch is not a space
        """
        glyph = Glyph(ch, sampler, bpp=self.bpp)
        width, height = self.cell_width, self.cell_height

        x_start, x_end = width, -1
        y_start, y_end = height, -1
        for y in range(height):
            for x in range(width):
                if sampler.sample(x, y):
                    if x < x_start: x_start = x
                    if x > x_end: x_end = x
                    if y < y_start: y_start = y
                    if y > y_end: y_end = y

        found = x_end >= 0
        if not found and ch != SPACE:
            return None
        if self.fixed_width:
            x_start, x_end = 0, width - 1
        elif not found:
            x_start, x_end = 0, width >> 1  # spaces are half width
        elif x_end < width - 1 and self.glyph_pad_x > 0:
            x_end += self.glyph_pad_x  # reserve a column after the glyph

        glyph.x_start = x_start
        glyph.x_end = x_end
        glyph.advance = x_end + 1 - x_start + self.glyph_pad_x

        if self.full_height:
            y_start, y_end = 0, height - 1
        elif y_start > y_end:
            y_start, y_end = EMPTY_Y_START, EMPTY_Y_END
        glyph.y_start = y_start
        glyph.y_end = y_end
        return glyph

    def generate_glyphs(self, source: PixelSource):
        """
        Populate glyphs by scanning every codepoint of every range.

        Ranges are scanned in order; a codepoint present in more than one
        range ends up with the glyph from the last one.

        Args:
            source: Callable (ch, x, y) -> intensity
        """
        skipped = 0
        for codepoints in self.ranges:
            for ch in codepoints:
                glyph = self.get_glyph(ch, SourceSampler(source, ch))
                if glyph is None:
                    skipped += 1
                else:
                    self.glyphs[ch] = glyph
        if skipped:
            self.warn(f"Skipped {skipped} empty glyphs")

    def add_glyph(self, glyph: Glyph):
        """Store a glyph built directly by a source with explicit boxes."""
        self.glyphs[glyph.ch] = glyph

    # =========================================================================
    # Transforms (applied in place, order matters)
    # =========================================================================

    def shift_up(self, n: int):
        transforms.shift_up(self, n)

    def nudge(self):
        transforms.nudge(self)

    def double_size(self, smooth: bool = False):
        transforms.double_size(self, smooth)

    def add_space(self):
        transforms.add_space(self)

    def remove_unifont_placeholders(self) -> int:
        return transforms.remove_unifont_placeholders(self)

    def __repr__(self):
        return (f"Font({self.name!r}, {len(self.glyphs)} glyphs, "
                f"cell={self.cell_width}x{self.cell_height}, "
                f"height={self.height}, bpp={self.bpp})")
