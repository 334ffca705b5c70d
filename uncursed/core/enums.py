"""Centralized enums and constants for the toolkit.

This module contains the colour, glyph and text-flag definitions shared by the
surfaces, the console and the menu, along with the forgiving string parsers
used when these values come from configuration files.
"""

from enum import Enum, IntFlag, auto


class Colour(Enum):
    """Foreground colours; each value doubles as the colour-pair number."""
    NONE = 0
    BLACK = 1
    RED = 2
    GREEN = 3
    YELLOW = 4
    BLUE = 5
    MAGENTA = 6
    CYAN = 7
    WHITE = 8


# Menu items drawn in this colour cannot be selected.
DISABLED_COLOUR = Colour.BLACK


class Glyph(Enum):
    """Line-drawing and special characters, resolved by each surface."""
    ULCORNER = 256
    LLCORNER = auto()
    URCORNER = auto()
    LRCORNER = auto()
    RTEE = auto()
    LTEE = auto()
    BTEE = auto()
    TTEE = auto()
    HLINE = auto()
    VLINE = auto()
    PLUS = auto()
    S1 = auto()
    S9 = auto()
    DIAMOND = auto()
    CKBOARD = auto()
    DEGREE = auto()
    PLMINUS = auto()
    BULLET = auto()
    LARROW = auto()
    RARROW = auto()
    DARROW = auto()
    UARROW = auto()
    BOARD = auto()
    LANTERN = auto()
    BLOCK = auto()
    S3 = auto()
    S7 = auto()
    LEQUAL = auto()
    GEQUAL = auto()
    PI = auto()
    NEQUAL = auto()
    STERLING = auto()


class TextFlag(IntFlag):
    """Attribute flags accepted by the print functions."""
    NONE = 0
    BOLD = 1      # Printed in bold.
    NL = 2        # Newline after the string.
    RAW = 4       # No word-wrap or other processing.
    REVERSE = 8   # Foreground and background swapped.
    DOUBLE = 16   # Single characters are drawn twice, side by side.
    BLINK = 32


class MenuFlag(IntFlag):
    """Optional inputs a menu can accept."""
    NONE = 0
    LEFT = 1
    RIGHT = 2


class TextAlign(Enum):
    """Horizontal alignment of menu item text."""
    CENTER = auto()
    LEFT = auto()
    RIGHT = auto()


COLOUR_NAMES = {colour.name: colour for colour in Colour if colour is not Colour.NONE}

# Scanned as substrings, in this order.
FLAG_NAMES = {
    "BOLD": TextFlag.BOLD,
    "NL": TextFlag.NL,
    "RAW": TextFlag.RAW,
    "REVERSE": TextFlag.REVERSE,
    "DOUBLE": TextFlag.DOUBLE,
    "BLINK": TextFlag.BLINK,
}


def parse_colour(text: str) -> Colour:
    """Parse a colour name, case-insensitively.

    Unrecognized or empty input gives Colour.NONE rather than an error.
    """
    if not text:
        return Colour.NONE
    return COLOUR_NAMES.get(text.strip().upper(), Colour.NONE)


def parse_flags(text: str) -> TextFlag:
    """Parse text such as "bold|reverse" into TextFlag bits.

    Each known flag name found anywhere in the string is OR-ed in; anything
    else is ignored, so unparsable input gives TextFlag.NONE.
    """
    flags = TextFlag.NONE
    if not text:
        return flags
    upper = text.upper()
    for name, flag in FLAG_NAMES.items():
        if name in upper:
            flags |= flag
    return flags
