"""
Readers for generated fonts.

Modules:
    pbf: PBF font parser
"""
from .pbf import PBFFont, PBFGlyph

__all__ = ["PBFFont", "PBFGlyph"]
