"""
PNG Charmap Source
==================
A 16x16 grid of character cells in one image: codepoint ch lives in
column ch & 15, row ch >> 4. Dark opaque pixels are set.
"""

from PIL import Image

from .base import FontSource

_GRID = 16
_ALPHA_THRESHOLD = 128


class CharmapSource(FontSource):
    """Load a 16x16 character map image (PNG or anything Pillow reads)."""

    def __init__(self, path, font):
        super().__init__(path, font)
        with Image.open(self.path) as img:
            self.image = img.convert("RGBA")
        self.width, self.height = self.image.size
        self._pixels = self.image.load()
        print(f"Font map is {self.width}x{self.height}")

        self.cell_width = self.width // _GRID
        self.cell_height = self.height // _GRID
        print(f"Font map char is {self.cell_width}x{self.cell_height}")

    def _intensity(self, x: int, y: int) -> int:
        r, g, b, a = self._pixels[x, y]
        if a < _ALPHA_THRESHOLD:
            return 0
        avg = (r + g + b) // 3
        if self.font.bpp == 1:
            return 1 - (avg >> 7)
        return 3 - (avg >> 6)

    def sample(self, ch: int, x: int, y: int) -> int:
        if not (0 <= x < self.cell_width and 0 <= y < self.cell_height):
            return 0
        py = (ch >> 4) * self.cell_height + y
        if py >= self.height:
            return 0
        return self._intensity((ch & 15) * self.cell_width + x, py)
