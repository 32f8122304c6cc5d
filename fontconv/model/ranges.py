"""
Codepoint Ranges
================
Named sets of codepoint ranges selectable from the command line.
"""

from typing import Dict, List


class CodepointRange:
    """Inclusive codepoint range."""

    def __init__(self, min: int, max: int):
        if min > max:
            raise ValueError(f"Invalid codepoint range {min}..{max}")
        self.min = min
        self.max = max

    def __iter__(self):
        return iter(range(self.min, self.max + 1))

    def __contains__(self, ch: int) -> bool:
        return self.min <= ch <= self.max

    def __eq__(self, other):
        return (isinstance(other, CodepointRange)
                and (self.min, self.max) == (other.min, other.max))

    def __repr__(self):
        return f"CodepointRange({self.min:#x}, {self.max:#x})"


# Each entry: list of (min, max) pairs plus a sample string for previews
FONT_RANGES: Dict[str, dict] = {
    "ASCII": {
        "range": [(32, 127)],
        "txt": "This is a test of the font",
    },
    "ASCIICapitals": {
        "range": [(32, 93)],
        "txt": "THIS IS A TEST OF THE FONT",
    },
    "Numeric": {
        "range": [(46, 58)],
        "txt": "0.123456789:/",
    },
    "ISO8859-1": {
        "range": [(32, 255)],
        "txt": "Thís îs ã tést øf thê fønt",
    },
    "Extended": {
        "range": [(32, 1111)],
        "txt": "Thís îs ã tést øf thê fønt",
    },
    "All": {
        "range": [(32, 0xFFFF)],
        "txt": "这是一个测试",
    },
    "Chinese": {
        "range": [(32, 255), (0x4E00, 0x9FAF)],
        "txt": "这是字体的测试",
    },
    "Korean": {
        "range": [(32, 255), (0x1100, 0x11FF), (0x3130, 0x318F),
                  (0xA960, 0xA97F), (0xAC00, 0xD7FF)],
        "txt": "이것은 글꼴 테스트입니다",
    },
    "Japanese": {
        "range": [(32, 255), (0x3000, 0x30FF), (0x4E00, 0x9FAF),
                  (0xFF00, 0xFFEF)],
        "txt": "これはフォントのテストです",
    },
}

DEFAULT_RANGE = "ASCII"


def get_ranges() -> Dict[str, dict]:
    """Return the table of named ranges."""
    return FONT_RANGES


def get_range(name: str) -> List[CodepointRange]:
    """
    Look up a named range.

    Raises:
        ValueError: If the name is unknown
    """
    if name not in FONT_RANGES:
        raise ValueError(f"Range ID {name} not found "
                         f"(available: {', '.join(FONT_RANGES)})")
    return [CodepointRange(lo, hi) for lo, hi in FONT_RANGES[name]["range"]]
