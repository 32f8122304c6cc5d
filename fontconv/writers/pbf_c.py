"""
PBF as C Source
===============
Wraps PBF output in a .c/.h pair so it can be compiled into firmware and
exposed as a `Graphics.setFont<Name>()` method.
"""

from pathlib import Path
from typing import Tuple

from .pbf import get_pbf

_BYTES_PER_LINE = 20

_HEADER_TEMPLATE = """\
/*
 * Generated by fontconv
 *
 * Contains Custom Fonts
 */

#include "jsvar.h"

JsVar *jswrap_graphics_setFont{name}(JsVar *parent);
"""

_SOURCE_TEMPLATE = """\
/*
 * This file is designed to be parsed during the build process
 *
 * Generated by fontconv
 *
 * Contains Custom Fonts
 */

#include "{filename}.h"
#include "jswrap_graphics.h"

static const unsigned char pbfData[] = {{
{data}
}};

/*JSON{{
  "type" : "method",
  "class" : "Graphics",
  "name" : "setFont{name}",
  "generate" : "jswrap_graphics_setFont{name}",
  "return" : ["JsVar","The instance of Graphics this was called on, to allow call chaining"],
  "return_object" : "Graphics"
}}
Set the current font
*/
JsVar *jswrap_graphics_setFont{name}(JsVar *parent) {{
  JsVar *pbfVar = jsvNewNativeString((char*)pbfData, sizeof(pbfData));
  JsVar *r = jswrap_graphics_setFontPBF(parent, pbfVar);
  jsvUnLock(pbfVar);
  return r;
}}
"""


def get_pbf_as_c(font, name: str, filename: str, **options) -> Tuple[str, str]:
    """
    Encode a font as PBF embedded in C.

    Args:
        font: Font to encode
        name: Identifier suffix for the setFont method (no spaces)
        filename: Base filename the .c file includes (without extension)
        **options: Passed on to get_pbf()

    Returns:
        (header_text, source_text) tuple
    """
    pbf = get_pbf(font, **options)
    rows = []
    for i in range(0, len(pbf), _BYTES_PER_LINE):
        rows.append("  " + ",".join(str(b) for b in pbf[i:i + _BYTES_PER_LINE]))
    data = ",\n".join(rows)

    header = _HEADER_TEMPLATE.format(name=name)
    source = _SOURCE_TEMPLATE.format(name=name, filename=filename, data=data)
    return header, source


def write_pbf_as_c(font, output: Path, name: str = None, **options):
    """
    Write <output>.h and <output>.c.

    Args:
        output: Path without extension
        name: Identifier suffix (defaults to the font id)
    """
    output = Path(output)
    header, source = get_pbf_as_c(font, name or font.id, output.name, **options)
    h_path = output.with_name(output.name + ".h")
    c_path = output.with_name(output.name + ".c")
    h_path.write_text(header)
    c_path.write_text(source)
    print(f"Created: {h_path}, {c_path}")
