#!/usr/bin/env python3
"""
Bitmap Font Converter
=====================
Converts bitmap fonts into formats for small embedded graphics runtimes.

Features:
- Input: 16x16 PNG charmaps, bitfontmaker2 JSON, PBFF text, BDF, TTF/OTF
- Output: PBF binary, PBF as C source, JavaScript, packed C header, PBFF
- Geometry fixes: shift up, nudge into row height, 2x scale (optionally smoothed)
- Unifont placeholder removal
- Preview rendered glyphs in terminal

Requirements:
    pip install bdflib Pillow
    pip install heatshrink2   (only for --compress)

Usage:
    # BDF to PBF
    fontconv unifont.bdf --range Chinese --remove-unifont-placeholders --opbf unifont.pbf

    # PNG charmap to JavaScript
    fontconv font8x8.png --height 8 --ojs font.js
"""

import argparse
import sys
from pathlib import Path

from .model.ranges import FONT_RANGES, DEFAULT_RANGE, get_range
from .preview import debug_chars, debug_pixels_used
from .sources import load, SOURCES
from .writers import get_header_file, get_js, get_pbff, write_pbf, write_pbf_as_c


class _TransformAction(argparse.Action):
    """Collect geometry transforms in command-line order."""

    def __call__(self, parser, namespace, values, option_string=None):
        transforms = list(getattr(namespace, self.dest, None) or [])
        transforms.append((self.const, values))
        setattr(namespace, self.dest, transforms)


def apply_transforms(font, transforms, smooth: bool = False):
    """
    Apply geometry transforms in the order given.

    Args:
        font: Font to modify
        transforms: List of (name, value) tuples
        smooth: Smooth when doubling size
    """
    for name, value in transforms:
        if name == "shift_up":
            print(f"Shifting glyphs up by {value}")
            font.shift_up(value)
        elif name == "nudge":
            print("Nudging glyphs into row height")
            font.nudge()
        elif name == "double_size":
            print(f"Doubling size{' (smoothed)' if smooth else ''}")
            font.double_size(smooth)
        elif name == "remove_unifont_placeholders":
            font.remove_unifont_placeholders()
        elif name == "add_space":
            font.add_space()
        else:
            raise ValueError(f"Unknown transform '{name}'")


def _get_compressor():
    try:
        import heatshrink2
    except ImportError:
        raise ValueError("heatshrink2 not installed. Run: pip install heatshrink2")
    # Window/lookahead must match the runtime's decompressor
    return lambda data: heatshrink2.compress(data, window_sz2=8, lookahead_sz2=4)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fontconv',
        description='Convert bitmap fonts to PBF, JS, C header or PBFF',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # BDF to binary PBF
  fontconv spleen-8x16.bdf --opbf spleen.pbf

  # Unifont CJK subset, placeholders removed, as C for firmware builds
  fontconv unifont.bdf --range Chinese --remove-unifont-placeholders --opbfc font_unifont

  # PNG charmap doubled with smoothing, nudged into a 16px row
  fontconv font8x8.png --height 8 --double-size --smooth --nudge --ojs font.js

  # Compressed JS output
  fontconv font.json --height 16 --ojs font.js --compress

Input formats: {', '.join(SOURCES)}
Available ranges: {', '.join(FONT_RANGES)}
        """
    )

    parser.add_argument('input', type=Path, help='Input font file')

    parser.add_argument('--name', help='Font name (default: input file name)')
    parser.add_argument('--height', type=int,
                        help='Output row height (default: font cell height)')
    parser.add_argument('--bpp', type=int, default=1, choices=(1, 2),
                        help='Bits per pixel (default: 1)')
    parser.add_argument('--range', dest='range_id', default=DEFAULT_RANGE,
                        choices=list(FONT_RANGES.keys()),
                        help=f'Range of characters to include (default: {DEFAULT_RANGE})')
    parser.add_argument('--fixed-width', action='store_true',
                        help='Make every glyph the full cell width')
    parser.add_argument('--full-height', action='store_true',
                        help='Make every glyph the full cell height')

    # Geometry transforms, applied in the order given
    parser.add_argument('--shift-up', type=int, metavar='N', dest='transforms',
                        action=_TransformAction, const='shift_up',
                        help='Move all glyphs up N pixels')
    parser.add_argument('--nudge', nargs=0, dest='transforms',
                        action=_TransformAction, const='nudge',
                        help='Shift glyphs vertically so they fit the row height')
    parser.add_argument('--double-size', nargs=0, dest='transforms',
                        action=_TransformAction, const='double_size',
                        help='Scale the font 2x')
    parser.add_argument('--remove-unifont-placeholders', nargs=0, dest='transforms',
                        action=_TransformAction, const='remove_unifont_placeholders',
                        help='Drop GNU Unifont missing-glyph boxes')
    parser.add_argument('--add-space', nargs=0, dest='transforms',
                        action=_TransformAction, const='add_space',
                        help='Add a blank space glyph if the font lacks one')
    parser.add_argument('--smooth', action='store_true',
                        help='Smooth diagonals when using --double-size')

    parser.add_argument('--debug', action='store_true',
                        help='Print every glyph and per-row pixel usage')

    parser.add_argument('--ojs', type=Path, help='Save as JavaScript (best below 1000 chars)')
    parser.add_argument('--compress', action='store_true',
                        help='Heatshrink-compress the JavaScript bitmap')
    parser.add_argument('--oh', type=Path, help='Save as packed C header (fixed width)')
    parser.add_argument('--opbf', type=Path, help='Save as binary PBF')
    parser.add_argument('--opbfc', type=Path,
                        help='Save PBF as C source (writes NAME.c and NAME.h)')
    parser.add_argument('--opbff', type=Path, help='Save as PBFF text')
    parser.add_argument('--pbf-version', type=int, default=3, choices=(2, 3),
                        help='PBF format version (default: 3)')
    parser.add_argument('--pbf-hashtable-size', type=int,
                        help='Number of PBF hash buckets (default: 64 for v2, 255 for v3)')

    return parser


def run(args):
    if not args.input.exists():
        raise ValueError(f"Input file not found: {args.input}")

    outputs = [args.ojs, args.oh, args.opbf, args.opbfc, args.opbff]
    if not any(outputs) and not args.debug:
        raise ValueError("No output specified (use --ojs, --oh, --opbf, --opbfc, --opbff or --debug)")

    print(f"Loading: {args.input}")
    font = load(args.input, name=args.name, height=args.height, bpp=args.bpp,
                ranges=get_range(args.range_id), fixed_width=args.fixed_width,
                full_height=args.full_height)

    apply_transforms(font, args.transforms or [], smooth=args.smooth)

    if args.debug:
        debug_chars(font)
        debug_pixels_used(font)

    pbf_options = {"version": args.pbf_version,
                   "hashtable_size": args.pbf_hashtable_size}

    if args.ojs:
        compress = _get_compressor() if args.compress else None
        args.ojs.write_text(get_js(font, compress=compress))
        print(f"Created: {args.ojs}")
    if args.oh:
        args.oh.write_text(get_header_file(font))
        print(f"Created: {args.oh}")
    if args.opbf:
        write_pbf(font, args.opbf, **pbf_options)
    if args.opbfc:
        write_pbf_as_c(font, args.opbfc, **pbf_options)
    if args.opbff:
        args.opbff.write_text(get_pbff(font), encoding='utf-8')
        print(f"Created: {args.opbff}")
    return font


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
