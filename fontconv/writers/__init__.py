"""
Output encoders.

Modules:
    bits: Pixel packing shared by the encoders
    pbf: Hash-indexed PBF binary format
    pbf_c: PBF wrapped in C source
    js: JavaScript font function
    header: Packed fixed-width C header
    pbff: PBFF text glyph-art
"""
from .bits import bits_to_bytes, bytes_to_bits, reverse_bits
from .pbf import get_pbf, write_pbf
from .pbf_c import get_pbf_as_c, write_pbf_as_c
from .js import get_js
from .header import get_header_file
from .pbff import get_pbff

__all__ = [
    "bits_to_bytes",
    "bytes_to_bits",
    "reverse_bits",
    "get_pbf",
    "write_pbf",
    "get_pbf_as_c",
    "write_pbf_as_c",
    "get_js",
    "get_header_file",
    "get_pbff",
]
