"""
BDF Source
==========
Loads X11/Linux BDF fonts with bdflib. BDF already gives every glyph an
explicit bounding box, so glyphs are built directly from it instead of
being found by scanning the cell.

Cell layout:
    height = FONT_ASCENT + FONT_DESCENT, baseline on row ascent - 1
    width  = widest advance or bitmap extent

A glyph with BBX (w, h, x, y) occupies columns x..x+w-1 and rows
ascent-y-h .. ascent-y-1 of the cell.
"""

import subprocess
import tempfile
from pathlib import Path

from ..model.glyph import Glyph, EMPTY_Y_START, EMPTY_Y_END
from ..model.sampler import FunctionSampler
from .base import FontSource

SPACE = 32


class BDFSource(FontSource):
    """Load a BDF font."""

    GLYPH_PAD_X = 0

    def __init__(self, path, font):
        super().__init__(path, font)
        try:
            from bdflib import reader
        except ImportError:
            raise ValueError("bdflib not installed. Run: pip install bdflib")

        with open(self.path, 'rb') as f:
            bdf = reader.read_bdf(f)

        props = bdf.properties
        self.ascent = int(props.get(b'FONT_ASCENT', 8))
        self.descent = int(props.get(b'FONT_DESCENT', 0))

        self.glyphs = {}
        for glyph in bdf.glyphs:
            if glyph.codepoint is None or glyph.codepoint < 0:
                continue
            self.glyphs[glyph.codepoint] = glyph
            self.cell_width = max(self.cell_width, glyph.advance,
                                  glyph.bbX + glyph.bbW)
        self.cell_height = self.ascent + self.descent

    def sample(self, ch: int, x: int, y: int) -> int:
        glyph = self.glyphs.get(ch)
        if glyph is None:
            return 0
        col = x - glyph.bbX
        row = y - (self.ascent - glyph.bbY - glyph.bbH)
        if not (0 <= col < glyph.bbW and 0 <= row < glyph.bbH):
            return 0
        bits = glyph.data[glyph.bbH - 1 - row]  # stored bottom to top
        return self.on if (bits >> (glyph.bbW - 1 - col)) & 1 else 0

    def _make_glyph(self, ch: int):
        font = self.font
        src = self.glyphs[ch]
        sampler = FunctionSampler(lambda x, y, ch=ch: self.sample(ch, x, y))
        has_pixels = src.bbW > 0 and src.bbH > 0 and any(src.data)

        if not has_pixels:
            if ch != SPACE:
                return None
            x_end = src.advance - 1 if src.advance > 0 else self.cell_width >> 1
            return Glyph(ch, sampler, bpp=font.bpp, x_start=0, x_end=x_end,
                         y_start=EMPTY_Y_START, y_end=EMPTY_Y_END,
                         advance=x_end + 1)

        glyph = Glyph(ch, sampler, bpp=font.bpp,
                      x_start=src.bbX, x_end=src.bbX + src.bbW - 1,
                      y_start=self.ascent - src.bbY - src.bbH,
                      y_end=self.ascent - src.bbY - 1,
                      advance=src.advance)
        if font.fixed_width:
            glyph.x_start, glyph.x_end = 0, self.cell_width - 1
            glyph.advance = self.cell_width
        if font.full_height:
            glyph.y_start, glyph.y_end = 0, self.cell_height - 1
        return glyph

    def build(self):
        font = self.font
        font.cell_width = self.cell_width
        font.cell_height = self.cell_height
        skipped = 0
        for codepoints in font.ranges:
            for ch in codepoints:
                if ch not in self.glyphs:
                    continue
                glyph = self._make_glyph(ch)
                if glyph is None:
                    skipped += 1
                else:
                    font.add_glyph(glyph)
        if skipped:
            font.warn(f"Skipped {skipped} empty glyphs")
        return font


class TTFSource(BDFSource):
    """
    Rasterize a TrueType/OpenType font with otf2bdf, then load the BDF.

    The font height is used as the point size (default 12).
    """

    def __init__(self, path, font, size: int = None):
        size = size or font.height or 12
        # BDFSource parses the whole file before the directory is removed
        with tempfile.TemporaryDirectory() as tmp:
            bdf_path = ttf_to_bdf(Path(path), size, Path(tmp))
            super().__init__(bdf_path, font)


def ttf_to_bdf(ttf_path: Path, size: int, output_dir: Path) -> Path:
    """
    Convert TTF to BDF using otf2bdf.

    Returns path to generated BDF file inside output_dir.
    """
    bdf_path = output_dir / f"{ttf_path.stem}_{size}pt.bdf"

    try:
        subprocess.run(['otf2bdf', '-h'], capture_output=True, check=False)
    except FileNotFoundError:
        raise ValueError("otf2bdf not found. Install with: "
                         "brew install otf2bdf / sudo apt install otf2bdf")

    print(f"Converting TTF to BDF at {size}pt...")
    result = subprocess.run(
        ['otf2bdf', '-p', str(size), '-o', str(bdf_path), str(ttf_path)],
        capture_output=True,
        text=True
    )

    # otf2bdf exits non-zero on some harmless warnings, so check the file too
    if not bdf_path.exists():
        raise ValueError(f"Error converting TTF: {result.stderr}")

    return bdf_path
