"""
fontconv
========
Bitmap font converter for small embedded graphics runtimes.

Architecture
------------
Data flows one way, from a source file to one or more encodings:

    FontSource      PNG / JSON / PBFF / BDF pixel source
       │
       └── Font              Glyph collection, bounding-box extraction
              │
              ├── Glyph          Box, advance, sampler chain
              │
              └── transforms     shift_up, nudge, double_size, ...
                     │
                     └── writers     PBF, PBF as C, JS, C header, PBFF

    PBFFont         Reads PBF output back (independent)

Quick Start
-----------
    from fontconv import load, get_range, get_pbf

    font = load("font.pbff", ranges=get_range("ISO8859-1"))
    font.nudge()
    data = get_pbf(font)

Module Structure
----------------
    fontconv/
    ├── cli.py               Command-line interface
    ├── preview.py           Terminal glyph dumps
    ├── model/
    │   ├── font.py          Font and bounding-box extraction
    │   ├── glyph.py         Glyph geometry
    │   ├── sampler.py       Composable pixel samplers
    │   ├── transforms.py    Geometry transforms
    │   └── ranges.py        Named codepoint ranges
    ├── sources/
    │   ├── base.py          FontSource interface
    │   ├── charmap.py       PNG charmap
    │   ├── bitfontmaker.py  JSON bit-grid
    │   ├── pbff.py          PBFF text
    │   └── bdf.py           BDF (and TTF via otf2bdf)
    ├── writers/
    │   ├── bits.py          Pixel packing
    │   ├── pbf.py           PBF binary
    │   ├── pbf_c.py         PBF as C source
    │   ├── js.py            JavaScript
    │   ├── header.py        Packed C header
    │   └── pbff.py          PBFF text
    └── decode/
        └── pbf.py           PBF reader
"""

from .model import Font, Glyph, CodepointRange, FONT_RANGES, get_range, get_ranges
from .sources import load
from .writers import (get_pbf, write_pbf, get_pbf_as_c, write_pbf_as_c,
                      get_js, get_header_file, get_pbff)
from .decode import PBFFont

__all__ = [
    # Model
    "Font",
    "Glyph",
    "CodepointRange",
    "FONT_RANGES",
    "get_range",
    "get_ranges",
    # Input
    "load",
    # Output
    "get_pbf",
    "write_pbf",
    "get_pbf_as_c",
    "write_pbf_as_c",
    "get_js",
    "get_header_file",
    "get_pbff",
    # Reading back
    "PBFFont",
]

__version__ = "1.0.0"
