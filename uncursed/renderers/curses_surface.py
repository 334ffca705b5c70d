import curses
import curses.panel
from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Colour, Glyph, TextFlag
from ..core.surface import SurfaceConfig, TerminalSurface


# Glyphs map to curses ACS_* names; the ACS values only exist after initscr().
GLYPH_ACS_NAMES = {
    Glyph.ULCORNER: "ACS_ULCORNER",
    Glyph.LLCORNER: "ACS_LLCORNER",
    Glyph.URCORNER: "ACS_URCORNER",
    Glyph.LRCORNER: "ACS_LRCORNER",
    Glyph.RTEE: "ACS_RTEE",
    Glyph.LTEE: "ACS_LTEE",
    Glyph.BTEE: "ACS_BTEE",
    Glyph.TTEE: "ACS_TTEE",
    Glyph.HLINE: "ACS_HLINE",
    Glyph.VLINE: "ACS_VLINE",
    Glyph.PLUS: "ACS_PLUS",
    Glyph.S1: "ACS_S1",
    Glyph.S9: "ACS_S9",
    Glyph.DIAMOND: "ACS_DIAMOND",
    Glyph.CKBOARD: "ACS_CKBOARD",
    Glyph.DEGREE: "ACS_DEGREE",
    Glyph.PLMINUS: "ACS_PLMINUS",
    Glyph.BULLET: "ACS_BULLET",
    Glyph.LARROW: "ACS_LARROW",
    Glyph.RARROW: "ACS_RARROW",
    Glyph.DARROW: "ACS_DARROW",
    Glyph.UARROW: "ACS_UARROW",
    Glyph.BOARD: "ACS_BOARD",
    Glyph.LANTERN: "ACS_LANTERN",
    Glyph.BLOCK: "ACS_BLOCK",
    Glyph.S3: "ACS_S3",
    Glyph.S7: "ACS_S7",
    Glyph.LEQUAL: "ACS_LEQUAL",
    Glyph.GEQUAL: "ACS_GEQUAL",
    Glyph.PI: "ACS_PI",
    Glyph.NEQUAL: "ACS_NEQUAL",
    Glyph.STERLING: "ACS_STERLING",
}

COLOUR_CURSES = {
    Colour.BLACK: curses.COLOR_BLACK,
    Colour.RED: curses.COLOR_RED,
    Colour.GREEN: curses.COLOR_GREEN,
    Colour.YELLOW: curses.COLOR_YELLOW,
    Colour.BLUE: curses.COLOR_BLUE,
    Colour.MAGENTA: curses.COLOR_MAGENTA,
    Colour.CYAN: curses.COLOR_CYAN,
    Colour.WHITE: curses.COLOR_WHITE,
}


@dataclass(eq=False)
class CursesHandle:
    window: "curses.window"
    panel: "curses.panel.panel"
    width: int
    height: int


class CursesSurface(TerminalSurface):
    """Terminal surface on top of curses, with panels for stacking."""

    def __init__(self, config: Optional[SurfaceConfig] = None):
        super().__init__(config)
        self.stdscr: Optional["curses.window"] = None
        self._has_colours = False
        self._key_codes = {
            "UP": curses.KEY_UP,
            "DOWN": curses.KEY_DOWN,
            "LEFT": curses.KEY_LEFT,
            "RIGHT": curses.KEY_RIGHT,
            "KEY_ENTER": curses.KEY_ENTER,
            "RESIZE": curses.KEY_RESIZE,
        }

    def initialize(self) -> None:
        self.stdscr = curses.initscr()
        curses.cbreak()
        self.stdscr.keypad(True)
        self._init_colours()
        self.set_cursor(self.cursor_visible)

    def cleanup(self) -> None:
        self.cursor_visible = True
        self._curs_set(1)
        curses.echo()
        if self.stdscr is not None:
            self.stdscr.keypad(False)
        curses.nocbreak()
        curses.endwin()
        self.stdscr = None

    def _init_colours(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        for colour, curses_colour in COLOUR_CURSES.items():
            curses.init_pair(colour.value, curses_colour, curses.COLOR_BLACK)
        self._has_colours = True

    @property
    def key_codes(self) -> dict[str, int]:
        return self._key_codes

    def _curs_set(self, mode: int) -> None:
        try:
            curses.curs_set(mode)
        except curses.error:
            # Some terminals cannot change cursor visibility
            pass

    def _apply_cursor(self, visible: bool) -> None:
        if visible:
            self._curs_set(2)
            curses.echo()
        else:
            self._curs_set(0)
            curses.noecho()

    def _attrs(self, colour: Colour, flags: TextFlag) -> int:
        attrs = 0
        if colour is not Colour.NONE and self._has_colours:
            attrs |= curses.color_pair(colour.value)
        if flags & TextFlag.BOLD:
            attrs |= curses.A_BOLD
        if flags & TextFlag.REVERSE:
            attrs |= curses.A_REVERSE
        if flags & TextFlag.BLINK:
            attrs |= curses.A_BLINK
        return attrs

    def _target(self, handle: Optional[CursesHandle]) -> "curses.window":
        return handle.window if handle is not None else self.stdscr

    def _enforce_minimum_size(self) -> None:
        rows, cols = self.stdscr.getmaxyx()
        if cols < self.config.min_width or rows < self.config.min_height:
            curses.resize_term(max(rows, self.config.min_height), max(cols, self.config.min_width))

    # ============== Handles ==============

    def create_handle(self, x: int, y: int, width: int, height: int) -> CursesHandle:
        window = curses.newwin(height, width, y, x)
        window.keypad(True)
        return CursesHandle(window, curses.panel.new_panel(window), width, height)

    def destroy_handle(self, handle: CursesHandle) -> None:
        # curses frees the panel and window once the last reference goes
        handle.panel.hide()
        handle.panel = None
        handle.window = None

    def move_handle(self, handle: CursesHandle, x: int, y: int) -> None:
        handle.panel.move(y, x)

    def top_handle(self, handle: CursesHandle) -> None:
        handle.panel.top()

    def set_handle_visible(self, handle: CursesHandle, visible: bool) -> None:
        if visible:
            handle.panel.show()
        else:
            handle.panel.hide()

    def get_size(self, handle: Optional[CursesHandle] = None) -> tuple[int, int]:
        if handle is not None:
            return (handle.width, handle.height)
        rows, cols = self.stdscr.getmaxyx()
        return (cols, rows)

    # ============== Drawing ==============

    def get_cursor(self, handle: Optional[CursesHandle] = None) -> tuple[int, int]:
        y, x = self._target(handle).getyx()
        return (x, y)

    def set_cursor_position(self, handle: Optional[CursesHandle], x: int, y: int) -> None:
        self._target(handle).move(y, x)

    def clear(self, handle: Optional[CursesHandle] = None) -> None:
        self._target(handle).clear()

    def clear_to_eol(self, handle: Optional[CursesHandle] = None) -> None:
        self._target(handle).clrtoeol()

    def draw_box(self, handle: Optional[CursesHandle], colour: Colour = Colour.NONE,
                 flags: TextFlag = TextFlag.NONE) -> None:
        window = self._target(handle)
        attrs = self._attrs(colour, flags)
        window.attron(attrs)
        window.box()
        window.attroff(attrs)

    def write(self, handle: Optional[CursesHandle], text: str, colour: Colour = Colour.NONE,
              flags: TextFlag = TextFlag.NONE) -> None:
        window = self._target(handle)
        attrs = self._attrs(colour, flags)
        window.attron(attrs)
        try:
            window.addstr(text)
        except curses.error:
            # Writing the bottom-right cell leaves the cursor nowhere to go
            pass
        finally:
            window.attroff(attrs)

    def write_char(self, handle: Optional[CursesHandle], char: Union[int, Glyph], colour: Colour = Colour.NONE,
                   flags: TextFlag = TextFlag.NONE) -> None:
        window = self._target(handle)
        code = getattr(curses, GLYPH_ACS_NAMES[char]) if isinstance(char, Glyph) else char
        attrs = self._attrs(colour, flags)
        try:
            window.addch(code, attrs)
            if flags & TextFlag.DOUBLE:
                window.addch(code, attrs)
        except curses.error:
            pass

    def present(self) -> None:
        self._enforce_minimum_size()
        curses.panel.update_panels()
        curses.doupdate()

    def set_window_title(self, title: str) -> None:
        # ncurses has no title support; PDCurses builds do.
        set_title = getattr(curses, "PDC_set_title", None)
        if set_title is not None:
            set_title(title)

    # ============== Input ==============

    def read_key(self, handle: Optional[CursesHandle] = None) -> int:
        key = self._target(handle).getch()
        if key == curses.KEY_RESIZE:
            curses.resize_term(0, 0)
            self._enforce_minimum_size()
            self._apply_cursor(self.cursor_visible)
        return key

    def read_line(self, handle: Optional[CursesHandle] = None, max_length: int = 255) -> str:
        return self._target(handle).getstr(max_length).decode("utf-8", errors="replace")

    def flush_input(self) -> None:
        curses.flushinp()
