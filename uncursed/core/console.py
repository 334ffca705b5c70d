"""
High-level drawing and input API.

The Console binds one terminal surface to its window compositor, key
bindings and log manager, and offers the everyday calls used to build
screens: clearing, boxing, printing with word-wrap, glyphs, cursor
movement and key reading. Every call that takes a window falls back to the
whole screen when the window is None.
"""
from typing import Optional, Union

from .enums import Colour, Glyph, TextFlag
from .input import KeyBindings
from .log_manager import LogManager
from .surface import SurfaceHandle, TerminalSurface
from .text_layout import print_wrapped
from .window import Window, WindowCompositor


class Console:

    def __init__(self, surface: TerminalSurface, key_bindings: Optional[KeyBindings] = None,
                 log_manager: Optional[LogManager] = None):
        self.surface = surface
        self.log_manager = log_manager or LogManager()
        self.keys = key_bindings or KeyBindings.default(surface.key_codes)
        self.compositor = WindowCompositor(surface, self.log_manager)

    @staticmethod
    def _handle(window: Optional[Window]) -> SurfaceHandle:
        return window.handle if window is not None else None

    # ============== Lifecycle ==============

    def init(self) -> None:
        self.surface.start()
        self.surface.set_cursor(True)
        self.log_manager.system("Console initialized")

    def shutdown(self) -> None:
        self.compositor.destroy_all()
        self.surface.set_cursor(True)
        self.surface.stop()
        self.log_manager.system("Console shut down")

    def set_cursor(self, enabled: bool) -> None:
        self.surface.set_cursor(enabled)

    def set_window_title(self, title: str) -> None:
        self.surface.set_window_title(title)

    # ============== Screen ==============

    def box(self, window: Optional[Window] = None, colour: Colour = Colour.NONE,
            flags: TextFlag = TextFlag.NONE) -> None:
        self.surface.draw_box(self._handle(window), colour, flags)

    def cls(self, window: Optional[Window] = None) -> None:
        self.surface.clear(self._handle(window))

    def clear_line(self, window: Optional[Window] = None) -> None:
        self.surface.clear_to_eol(self._handle(window))

    def flip(self) -> None:
        self.surface.present()

    def get_cols(self, window: Optional[Window] = None) -> int:
        if window is not None:
            return window.width
        return self.surface.get_screen_size()[0]

    def get_rows(self, window: Optional[Window] = None) -> int:
        if window is not None:
            return window.height
        return self.surface.get_screen_size()[1]

    def get_midcol(self, window: Optional[Window] = None) -> int:
        return self.get_cols(window) // 2

    def get_midrow(self, window: Optional[Window] = None) -> int:
        return self.get_rows(window) // 2

    # ============== Cursor ==============

    def get_cursor_x(self, window: Optional[Window] = None) -> int:
        return self.surface.get_cursor(self._handle(window))[0]

    def get_cursor_y(self, window: Optional[Window] = None) -> int:
        return self.surface.get_cursor(self._handle(window))[1]

    def move_cursor(self, x: int, y: int, window: Optional[Window] = None) -> None:
        """Move the cursor; -1 on either axis keeps the current position there."""
        if x == -1 and y == -1:
            return
        handle = self._handle(window)
        old_x, old_y = self.surface.get_cursor(handle)
        if x == -1:
            x = old_x
        if y == -1:
            y = old_y
        self.surface.set_cursor_position(handle, x, y)

    # ============== Printing ==============

    def print(self, text: str, colour: Colour = Colour.NONE, flags: TextFlag = TextFlag.NONE,
              x: int = -1, y: int = -1, window: Optional[Window] = None) -> None:
        """Print text, word-wrapped unless the RAW flag is set."""
        if not text:
            return
        handle = self._handle(window)
        self.move_cursor(x, y, window)
        if flags & TextFlag.RAW:
            self.surface.write(handle, text, colour, flags)
            if flags & TextFlag.NL:
                self.surface.write(handle, "\n", colour, flags)
            return
        print_wrapped(self.surface, text, colour, flags, handle)

    def print_char(self, char: Union[int, str, Glyph], colour: Colour = Colour.NONE,
                   flags: TextFlag = TextFlag.NONE, x: int = -1, y: int = -1,
                   window: Optional[Window] = None) -> None:
        if isinstance(char, str):
            char = ord(char)
        self.move_cursor(x, y, window)
        self.surface.write_char(self._handle(window), char, colour, flags)

    def print_glyph(self, glyph: Glyph, colour: Colour = Colour.NONE, flags: TextFlag = TextFlag.NONE,
                    x: int = -1, y: int = -1, window: Optional[Window] = None) -> None:
        self.print_char(glyph, colour, flags, x, y, window)

    def newline(self, window: Optional[Window] = None, count: int = 1) -> None:
        for _ in range(count):
            self.print_char("\n", window=window)

    def render_grid(self, x: int, y: int, w: int, h: int, colour: Colour = Colour.NONE,
                    window: Optional[Window] = None) -> None:
        """Draw a w by h grid of cells, each 4 columns by 2 rows, at (x, y)."""
        for gx in range(w):
            for gy in range(h):
                screen_x = x + gx * 4
                screen_y = y + gy * 2
                glyph_l, glyph_r = Glyph.PLUS, Glyph.PLUS
                if gy == 0:
                    glyph_l = glyph_r = Glyph.TTEE
                    if gx == 0:
                        glyph_l = Glyph.ULCORNER
                    elif gx == w - 1:
                        glyph_r = Glyph.URCORNER
                elif gx == 0:
                    glyph_l = Glyph.LTEE
                elif gx == w - 1:
                    glyph_r = Glyph.RTEE

                self.print_glyph(glyph_l, colour, x=screen_x, y=screen_y, window=window)
                for i in range(1, 4):
                    self.print_glyph(Glyph.HLINE, colour, x=screen_x + i, y=screen_y, window=window)
                self.print_glyph(Glyph.VLINE, colour, x=screen_x, y=screen_y + 1, window=window)
                if gx == w - 1:
                    self.print_glyph(glyph_r, colour, x=screen_x + 4, y=screen_y, window=window)
                    self.print_glyph(Glyph.VLINE, colour, x=screen_x + 4, y=screen_y + 1, window=window)
                if gy == h - 1:
                    glyph_bl = Glyph.LLCORNER if gx == 0 else Glyph.BTEE
                    self.print_glyph(glyph_bl, colour, x=screen_x, y=screen_y + 2, window=window)
                    for i in range(1, 4):
                        self.print_glyph(Glyph.HLINE, colour, x=screen_x + i, y=screen_y + 2, window=window)
                    if gx == w - 1:
                        self.print_glyph(Glyph.LRCORNER, colour, x=screen_x + 4, y=screen_y + 2, window=window)

    # ============== Input ==============

    def get_key(self, window: Optional[Window] = None) -> int:
        key = self.surface.read_key(self._handle(window))
        self.log_manager.input(f"Key {key}")
        return key

    def get_string(self, window: Optional[Window] = None) -> str:
        return self.surface.read_line(self._handle(window))

    def flush(self) -> None:
        self.surface.flush_input()

    @property
    def resize_key(self) -> int:
        return self.surface.resize_key

    def is_up(self, key: int) -> bool:
        return self.keys.is_up(key)

    def is_down(self, key: int) -> bool:
        return self.keys.is_down(key)

    def is_left(self, key: int) -> bool:
        return self.keys.is_left(key)

    def is_right(self, key: int) -> bool:
        return self.keys.is_right(key)

    def is_select(self, key: int) -> bool:
        return self.keys.is_select(key)

    def is_cancel(self, key: int) -> bool:
        return self.keys.is_cancel(key)
