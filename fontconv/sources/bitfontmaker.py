"""
JSON Bit-Grid Source
====================
Fonts exported by bitfontmaker2: a JSON object mapping each codepoint
(as a string) to 16 row integers, where bit x of row y is pixel (x, y).
Non-numeric keys (name, copyright, ...) are ignored.
"""

import json

from .base import FontSource

_CELL = 16


class BitFontMakerSource(FontSource):
    """Load a bitfontmaker2 JSON export."""

    def __init__(self, path, font):
        super().__init__(path, font)
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        self.rows = {}
        for key, value in data.items():
            if key.isdigit() and isinstance(value, list):
                self.rows[int(key)] = value
        self.cell_width = _CELL
        self.cell_height = _CELL

    def sample(self, ch: int, x: int, y: int) -> int:
        rows = self.rows.get(ch)
        if not rows or not (0 <= x < _CELL and 0 <= y < len(rows)):
            return 0
        return self.on if (rows[y] >> x) & 1 else 0
