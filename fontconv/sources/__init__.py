"""
Font sources - input formats behind one pixel-sampling interface.

Modules:
    base: FontSource interface
    charmap: 16x16 PNG character map
    bitfontmaker: bitfontmaker2 JSON bit-grid
    pbff: Pebble PBFF text glyph-art
    bdf: BDF fonts (and TTF/OTF via otf2bdf)

Usage:
    from fontconv.sources import load

    font = load("font.pbff", height=14, ranges=get_range("ASCII"))
"""
from pathlib import Path

from ..model.font import Font
from .base import FontSource
from .charmap import CharmapSource
from .bitfontmaker import BitFontMakerSource
from .pbff import PBFFSource
from .bdf import BDFSource, TTFSource

SOURCES = {
    ".png": CharmapSource,
    ".json": BitFontMakerSource,
    ".pbff": PBFFSource,
    ".bdf": BDFSource,
    ".ttf": TTFSource,
    ".otf": TTFSource,
}


def get_source_class(path) -> type:
    """
    Pick the source class for a file by its extension.

    Raises:
        ValueError: For an unsupported extension
    """
    suffix = Path(path).suffix.lower()
    if suffix not in SOURCES:
        raise ValueError(f"Unknown font type '{suffix}' "
                         f"(supported: {', '.join(SOURCES)})")
    return SOURCES[suffix]


def load(path, name: str = None, height: int = None, bpp: int = 1,
         ranges=None, fixed_width: bool = False, full_height: bool = False,
         glyph_pad_x: int = None) -> Font:
    """
    Load a font file into a Font.

    Args:
        path: Source file (.png, .json, .pbff, .bdf, .ttf, .otf)
        name: Font name (defaults to the file stem)
        height: Output row height (defaults to the cell height)
        bpp: Bits per pixel (1 or 2)
        ranges: List of CodepointRange (default ASCII)
        fixed_width: Make every glyph full cell width
        full_height: Make every glyph full cell height
        glyph_pad_x: Trailing padding (default depends on the format)

    Returns:
        Populated Font
    """
    path = Path(path)
    source_cls = get_source_class(path)
    if glyph_pad_x is None:
        glyph_pad_x = source_cls.GLYPH_PAD_X

    font = Font(name or path.stem, height=height, bpp=bpp, ranges=ranges,
                fixed_width=fixed_width, full_height=full_height,
                glyph_pad_x=glyph_pad_x)
    source_cls(path, font).build()
    if font.height is None:
        font.height = font.cell_height

    print(f"Loaded {len(font.glyphs)} glyphs, {font.cell_width}x{font.cell_height}")
    return font


__all__ = [
    "FontSource",
    "CharmapSource",
    "BitFontMakerSource",
    "PBFFSource",
    "BDFSource",
    "TTFSource",
    "SOURCES",
    "get_source_class",
    "load",
]
