"""
Text layout for fixed-width terminals.

Two line-breaking rules live here and are intentionally not merged:

- wrap_to_width() breaks static text blocks (such as a menu's side panel)
  against an absolute column budget that starts at column 0.
- split_from_cursor() / print_wrapped() break live output against the space
  left on a row that may already hold earlier output.
"""
from collections import deque
from typing import Callable, Optional, TYPE_CHECKING

from .enums import Colour, TextFlag

if TYPE_CHECKING:
    from .surface import TerminalSurface, SurfaceHandle


# Any callable with the signature of wrap_to_width can stand in for it.
TextSplitter = Callable[[str, int], list[str]]


def wrap_to_width(text: str, width: int) -> list[str]:
    """Greedy word-wrap of text into lines no longer than width.

    Words are separated by single spaces. A word longer than width is cut
    at exactly width characters and the remainder is queued as the next
    word, so it is cut again if it is still too long.

    Args:
        text: The text to wrap
        width: Maximum line length, at least 1

    Returns:
        The wrapped lines; text that already fits comes back unchanged
    """
    if width < 1:
        raise ValueError(f"Cannot wrap text to a width of {width}")
    if len(text) <= width:
        return [text]

    words = deque(text.split(" "))
    lines: list[str] = []
    current_line = ""
    while words:
        word = words.popleft()
        if len(word) > width:
            words.appendleft(word[width:])
            words.appendleft(word[:width])
            continue
        if current_line and len(current_line) + len(word) + 1 > width:
            lines.append(current_line)
            current_line = word
            continue
        current_line = f"{current_line} {word}" if current_line else word
    if current_line:
        lines.append(current_line)
    return lines


def split_from_cursor(text: str, cursor_x: int, width: int) -> list[str]:
    """Break text into row segments, starting from a partially used row.

    Leading spaces are kept as indentation on the first word. A break
    happens when the line so far, the next word and the cursor column
    reach the row width; after the first break the cursor column is 0.
    Each segment after the first is meant to start on a fresh row.
    """
    stripped = text.lstrip(" ")
    indent = len(text) - len(stripped)
    words = stripped.split(" ")
    if indent:
        words[0] = " " * indent + words[0]

    segments: list[str] = []
    line = ""
    for word in words:
        if len(line) + len(word) + cursor_x >= width:
            segments.append(line)
            line = word
            cursor_x = 0
        elif line:
            line += " " + word
        else:
            line = word
    if line:
        segments.append(line)
    return segments


def print_wrapped(surface: "TerminalSurface", text: str, colour: Colour = Colour.NONE,
                  flags: TextFlag = TextFlag.NONE, handle: Optional["SurfaceHandle"] = None) -> None:
    """Word-wrap text onto a surface from its current cursor position."""
    if not text:
        return
    width, _ = surface.get_size(handle)
    cursor_x, _ = surface.get_cursor(handle)

    for i, segment in enumerate(split_from_cursor(text, cursor_x, width)):
        if i > 0 and surface.get_cursor(handle)[0] != 0:
            surface.write(handle, "\n", colour, flags)
        if segment:
            surface.write(handle, segment, colour, flags)

    if flags & TextFlag.NL and surface.get_cursor(handle)[0] != 0:
        surface.write(handle, "\n", colour, flags)
