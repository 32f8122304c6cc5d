"""
Font model - glyphs, fonts, samplers and geometry transforms.

Modules:
    glyph: Glyph geometry and pixel access
    font: Font container and bounding-box extraction
    sampler: Composable pixel samplers
    transforms: Shift, nudge, 2x scale, placeholder removal
    ranges: Named codepoint ranges
"""
from .glyph import Glyph
from .font import Font
from .ranges import CodepointRange, FONT_RANGES, get_range, get_ranges
from .sampler import (PixelSampler, SourceSampler, FunctionSampler,
                      ShiftSampler, ScaleSampler, SmoothScaleSampler)

__all__ = [
    "Glyph",
    "Font",
    "CodepointRange",
    "FONT_RANGES",
    "get_range",
    "get_ranges",
    "PixelSampler",
    "SourceSampler",
    "FunctionSampler",
    "ShiftSampler",
    "ScaleSampler",
    "SmoothScaleSampler",
]
