from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

import numpy as np

from ..core.enums import Colour, Glyph, TextFlag
from ..core.surface import SurfaceConfig, TerminalSurface


# Same values curses reports, so recorded key scripts work on both surfaces.
BUFFER_KEY_CODES = {
    "DOWN": 0o402,
    "UP": 0o403,
    "LEFT": 0o404,
    "RIGHT": 0o405,
    "KEY_ENTER": 0o527,
    "RESIZE": 0o632,
}

# Unicode stand-ins for the line-drawing glyphs.
GLYPH_CHARS = {
    Glyph.ULCORNER: "┌",
    Glyph.LLCORNER: "└",
    Glyph.URCORNER: "┐",
    Glyph.LRCORNER: "┘",
    Glyph.RTEE: "┤",
    Glyph.LTEE: "├",
    Glyph.BTEE: "┴",
    Glyph.TTEE: "┬",
    Glyph.HLINE: "─",
    Glyph.VLINE: "│",
    Glyph.PLUS: "┼",
    Glyph.S1: "⎺",
    Glyph.S9: "⎽",
    Glyph.DIAMOND: "◆",
    Glyph.CKBOARD: "▒",
    Glyph.DEGREE: "°",
    Glyph.PLMINUS: "±",
    Glyph.BULLET: "·",
    Glyph.LARROW: "←",
    Glyph.RARROW: "→",
    Glyph.DARROW: "↓",
    Glyph.UARROW: "↑",
    Glyph.BOARD: "▒",
    Glyph.LANTERN: "☃",
    Glyph.BLOCK: "█",
    Glyph.S3: "⎻",
    Glyph.S7: "⎼",
    Glyph.LEQUAL: "≤",
    Glyph.GEQUAL: "≥",
    Glyph.PI: "π",
    Glyph.NEQUAL: "≠",
    Glyph.STERLING: "£",
}


class InputExhausted(RuntimeError):
    """Raised when a scripted surface is asked for a key it does not have."""


@dataclass(eq=False)
class CellBuffer:
    """Characters, colours and attribute flags for one rectangular region."""
    x: int
    y: int
    width: int
    height: int
    visible: bool = True
    cursor_x: int = 0
    cursor_y: int = 0
    chars: np.ndarray = field(init=False)
    colours: np.ndarray = field(init=False)
    flags: np.ndarray = field(init=False)

    def __post_init__(self):
        self.chars = np.full((self.height, self.width), " ", dtype="<U1")
        self.colours = np.zeros((self.height, self.width), dtype=np.uint8)
        self.flags = np.zeros((self.height, self.width), dtype=np.uint8)

    def clear(self) -> None:
        self.chars[:] = " "
        self.colours[:] = Colour.NONE.value
        self.flags[:] = 0
        self.cursor_x = 0
        self.cursor_y = 0

    def clear_to_eol(self) -> None:
        if self.cursor_y < self.height:
            self.chars[self.cursor_y, self.cursor_x:] = " "
            self.colours[self.cursor_y, self.cursor_x:] = Colour.NONE.value
            self.flags[self.cursor_y, self.cursor_x:] = 0

    def put(self, char: str, colour: Colour, flags: TextFlag) -> bool:
        """Write one character at the cursor and advance it, wrapping at the edge.

        Returns:
            bool: False once the cursor has run off the bottom of the region
        """
        if self.cursor_y >= self.height:
            return False
        if char == "\n":
            self.clear_to_eol()
            self.cursor_x = 0
            self.cursor_y = min(self.cursor_y + 1, self.height - 1)
            return True
        self.chars[self.cursor_y, self.cursor_x] = char
        self.colours[self.cursor_y, self.cursor_x] = colour.value
        self.flags[self.cursor_y, self.cursor_x] = int(flags)
        self.cursor_x += 1
        if self.cursor_x >= self.width:
            self.cursor_x = 0
            self.cursor_y += 1
        return True

    def set_cell(self, x: int, y: int, char: str, colour: Colour, flags: TextFlag) -> None:
        self.chars[y, x] = char
        self.colours[y, x] = colour.value
        self.flags[y, x] = int(flags)

    def row_text(self, y: int) -> str:
        return "".join(self.chars[y])


class BufferSurface(TerminalSurface):
    """An off-screen surface backed by numpy cell arrays.

    Keys come from a script fed in advance, which makes the surface suitable
    for tests and for rendering screens without a terminal.
    """

    def __init__(self, config: Optional[SurfaceConfig] = None, keys: Iterable[int] = ()):
        super().__init__(config)
        # screen is what gets drawn with no handle; display is the composited result
        self.screen = CellBuffer(0, 0, self.config.width, self.config.height)
        self.display = CellBuffer(0, 0, self.config.width, self.config.height)
        self.handles: list[CellBuffer] = []
        self.title = self.config.title
        self.present_count = 0
        self._keys: deque[int] = deque(keys)

    # ============== Lifecycle ==============

    def initialize(self) -> None:
        self.screen.clear()

    def cleanup(self) -> None:
        self.handles.clear()

    @property
    def key_codes(self) -> dict[str, int]:
        return BUFFER_KEY_CODES

    def _apply_cursor(self, visible: bool) -> None:
        pass

    def set_window_title(self, title: str) -> None:
        self.title = title

    def resize(self, width: int, height: int) -> None:
        """Change the screen size and queue a resize key, as a terminal would."""
        self.config.width = width
        self.config.height = height
        self.screen = CellBuffer(0, 0, width, height)
        self.display = CellBuffer(0, 0, width, height)
        self._keys.appendleft(self.resize_key)

    # ============== Handles ==============

    def _target(self, handle: Optional[CellBuffer]) -> CellBuffer:
        return handle if handle is not None else self.screen

    def create_handle(self, x: int, y: int, width: int, height: int) -> CellBuffer:
        handle = CellBuffer(x, y, width, height)
        self.handles.append(handle)
        return handle

    def destroy_handle(self, handle: CellBuffer) -> None:
        if handle in self.handles:
            self.handles.remove(handle)

    def move_handle(self, handle: CellBuffer, x: int, y: int) -> None:
        handle.x = x
        handle.y = y

    def top_handle(self, handle: CellBuffer) -> None:
        self.handles.remove(handle)
        self.handles.append(handle)

    def set_handle_visible(self, handle: CellBuffer, visible: bool) -> None:
        handle.visible = visible

    def get_size(self, handle: Optional[CellBuffer] = None) -> tuple[int, int]:
        target = self._target(handle)
        return (target.width, target.height)

    # ============== Drawing ==============

    def get_cursor(self, handle: Optional[CellBuffer] = None) -> tuple[int, int]:
        target = self._target(handle)
        return (target.cursor_x, target.cursor_y)

    def set_cursor_position(self, handle: Optional[CellBuffer], x: int, y: int) -> None:
        target = self._target(handle)
        target.cursor_x = max(0, min(x, target.width - 1))
        target.cursor_y = max(0, min(y, target.height - 1))

    def clear(self, handle: Optional[CellBuffer] = None) -> None:
        self._target(handle).clear()

    def clear_to_eol(self, handle: Optional[CellBuffer] = None) -> None:
        self._target(handle).clear_to_eol()

    def draw_box(self, handle: Optional[CellBuffer], colour: Colour = Colour.NONE,
                 flags: TextFlag = TextFlag.NONE) -> None:
        target = self._target(handle)
        right, bottom = target.width - 1, target.height - 1
        for x in range(1, right):
            target.set_cell(x, 0, GLYPH_CHARS[Glyph.HLINE], colour, flags)
            target.set_cell(x, bottom, GLYPH_CHARS[Glyph.HLINE], colour, flags)
        for y in range(1, bottom):
            target.set_cell(0, y, GLYPH_CHARS[Glyph.VLINE], colour, flags)
            target.set_cell(right, y, GLYPH_CHARS[Glyph.VLINE], colour, flags)
        target.set_cell(0, 0, GLYPH_CHARS[Glyph.ULCORNER], colour, flags)
        target.set_cell(right, 0, GLYPH_CHARS[Glyph.URCORNER], colour, flags)
        target.set_cell(0, bottom, GLYPH_CHARS[Glyph.LLCORNER], colour, flags)
        target.set_cell(right, bottom, GLYPH_CHARS[Glyph.LRCORNER], colour, flags)

    def write(self, handle: Optional[CellBuffer], text: str, colour: Colour = Colour.NONE,
              flags: TextFlag = TextFlag.NONE) -> None:
        target = self._target(handle)
        for char in text:
            if not target.put(char, colour, flags):
                break

    def write_char(self, handle: Optional[CellBuffer], char: Union[int, Glyph], colour: Colour = Colour.NONE,
                   flags: TextFlag = TextFlag.NONE) -> None:
        text = GLYPH_CHARS[char] if isinstance(char, Glyph) else chr(char)
        if flags & TextFlag.DOUBLE:
            text *= 2
        self.write(handle, text, colour, flags)

    def present(self) -> None:
        """Composite the visible handles onto the screen, bottom first."""
        self.present_count += 1
        display = self.display
        np.copyto(display.chars, self.screen.chars)
        np.copyto(display.colours, self.screen.colours)
        np.copyto(display.flags, self.screen.flags)
        for handle in self.handles:
            if not handle.visible:
                continue
            x0, y0 = max(handle.x, 0), max(handle.y, 0)
            x1 = min(handle.x + handle.width, display.width)
            y1 = min(handle.y + handle.height, display.height)
            if x0 >= x1 or y0 >= y1:
                continue
            src = np.s_[y0 - handle.y:y1 - handle.y, x0 - handle.x:x1 - handle.x]
            display.chars[y0:y1, x0:x1] = handle.chars[src]
            display.colours[y0:y1, x0:x1] = handle.colours[src]
            display.flags[y0:y1, x0:x1] = handle.flags[src]

    # ============== Input ==============

    def feed_keys(self, keys: Iterable[int]) -> None:
        self._keys.extend(keys)

    @property
    def pending_keys(self) -> int:
        return len(self._keys)

    def read_key(self, handle: Optional[CellBuffer] = None) -> int:
        if not self._keys:
            raise InputExhausted("No scripted keys left to read")
        return self._keys.popleft()

    def read_line(self, handle: Optional[CellBuffer] = None, max_length: int = 255) -> str:
        chars = []
        while len(chars) < max_length:
            key = self.read_key(handle)
            if key in (ord("\n"), ord("\r")):
                break
            chars.append(chr(key))
        return "".join(chars)

    def flush_input(self) -> None:
        self._keys.clear()

    # ============== Inspection ==============

    def screen_lines(self) -> list[str]:
        """The display as of the last present()."""
        return [self.display.row_text(y) for y in range(self.display.height)]

    def handle_lines(self, handle: CellBuffer) -> list[str]:
        return [handle.row_text(y) for y in range(handle.height)]
