"""
A generic scrollable menu.

The menu is centred on an 80x24 screen, shows at most 22 items at a time and
scrolls one row at a time as the selection moves. Items drawn in the
disabled colour cannot be selected, and items with empty text act as
separators that the selection skips over. An optional side panel to the left
of the menu shows extra text for the selected item.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..core.console import Console
from ..core.enums import DISABLED_COLOUR, Colour, Glyph, MenuFlag, TextAlign, TextFlag
from ..core.text_layout import TextSplitter, wrap_to_width
from ..core.window import Window


MENU_SIDEBOX_WIDTH = 20
MENU_MAX_HEIGHT = 24
MENU_VISIBLE_ROWS = MENU_MAX_HEIGHT - 2
SCREEN_MIDCOL = 40
SCREEN_MIDROW = 12

# render() results that are not item indices
MENU_CANCEL = -1
MENU_LEFT = -2
MENU_RIGHT = -3


class MenuPhase(Enum):
    """Lifecycle of a menu."""
    IDLE = auto()       # Constructed, no windows yet
    LAID_OUT = auto()   # Geometry computed, windows created
    RENDERING = auto()  # Inside the key-read loop


@dataclass
class MenuItem:
    text: str
    colour: Colour = Colour.NONE
    sidebox: str = ""
    x: int = 0

    @property
    def is_disabled(self) -> bool:
        return self.colour is DISABLED_COLOUR

    @property
    def is_separator(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class MenuGeometry:
    """Screen placement of a laid-out menu; window-relative where noted."""
    x: int
    y: int
    width: int
    height: int
    title_x: int        # window-relative
    tag_left_x: int     # window-relative
    tag_right_x: int    # window-relative
    item_x: tuple[int, ...]


class Menu:

    def __init__(self, console: Console, splitter: TextSplitter = wrap_to_width):
        self.console = console
        self.splitter = splitter
        self.items: list[MenuItem] = []
        self.selected = 0
        self.offset = 0
        self.title = ""
        self.tag_left = ""
        self.tag_right = ""
        self.allow_left = False
        self.allow_right = False
        self.alignment = TextAlign.CENTER
        self.sidebox_enabled = False
        self.sidebox_height = 0
        self.redraw_on_exit = True
        self.phase = MenuPhase.IDLE
        self.geometry: Optional[MenuGeometry] = None
        self.window: Optional[Window] = None
        self.sidebox_window: Optional[Window] = None

    # ============== Setup ==============

    def add_item(self, text: str, colour: Colour = Colour.NONE, sidebox: str = "") -> None:
        """Add an item; empty text makes a separator."""
        self.items.append(MenuItem(text, colour, sidebox))
        if sidebox:
            height = len(self.splitter(sidebox, MENU_SIDEBOX_WIDTH))
            self.sidebox_height = max(self.sidebox_height, height)
            self.console.log_manager.layout(f"Side panel for '{text}' wraps to {height} lines")

    def set_title(self, title: str) -> None:
        self.title = title

    def set_tags(self, bottom_left: str = "", bottom_right: str = "") -> None:
        """Set one or both bottom-corner tags; an empty argument keeps the old tag."""
        if bottom_left:
            self.tag_left = bottom_left
        if bottom_right:
            self.tag_right = bottom_right

    def allow_left_right(self, flags: MenuFlag = MenuFlag.NONE) -> None:
        if flags & MenuFlag.LEFT:
            self.allow_left = True
        if flags & MenuFlag.RIGHT:
            self.allow_right = True

    def set_selected(self, pos: int) -> None:
        if not 0 <= pos < len(self.items):
            raise IndexError(f"Menu item {pos} out of range (menu has {len(self.items)} items)")
        self.selected = pos
        self._clamp_scroll()

    def no_redraw_on_exit(self) -> None:
        self.redraw_on_exit = False

    def set_centered_text(self, choice: bool) -> None:
        self.alignment = TextAlign.CENTER if choice else TextAlign.LEFT

    def set_alignment(self, alignment: TextAlign) -> None:
        self.alignment = alignment

    def set_sidebox(self, choice: bool) -> None:
        self.sidebox_enabled = choice

    # ============== Layout ==============

    def _item_x(self, item: MenuItem, width: int) -> int:
        if self.alignment is TextAlign.LEFT:
            return 2
        if self.alignment is TextAlign.RIGHT:
            return width - 2 - len(item.text)
        return width // 2 - len(item.text) // 2

    def reposition(self) -> None:
        """Size and centre the menu, replacing its windows."""
        if not self.items:
            return

        widest = max(len(item.text) for item in self.items)
        widest = max(widest, len(self.tag_left) + len(self.tag_right), len(self.title))
        width = widest + 4
        height = min(len(self.items) + 2, MENU_MAX_HEIGHT)
        x = SCREEN_MIDCOL - width // 2
        y = SCREEN_MIDROW - height // 2
        if self.sidebox_enabled:
            x += (MENU_SIDEBOX_WIDTH + 2) // 2

        compositor = self.console.compositor
        self.window = compositor.replace_window(self.window, width, height, x, y)
        if self.sidebox_enabled:
            self.sidebox_window = compositor.replace_window(
                self.sidebox_window, MENU_SIDEBOX_WIDTH + 4, self.sidebox_height + 2,
                x - MENU_SIDEBOX_WIDTH - 4, y)
        else:
            compositor.destroy_window(self.sidebox_window)
            self.sidebox_window = None

        for item in self.items:
            item.x = self._item_x(item, width)

        self.geometry = MenuGeometry(
            x=x,
            y=y,
            width=width,
            height=height,
            title_x=width // 2 - len(self.title) // 2,
            tag_left_x=1,
            tag_right_x=width - len(self.tag_right) - 1,
            item_x=tuple(item.x for item in self.items),
        )
        self.phase = MenuPhase.LAID_OUT
        self.console.log_manager.menu(f"Menu laid out at {x},{y} ({width}x{height})")

    # ============== Rendering ==============

    def _skip_disabled_start(self) -> None:
        """Move an initial selection off a disabled item, if any item is enabled."""
        if not self.items[self.selected].is_disabled:
            return
        count = len(self.items)
        for step in range(1, count):
            candidate = (self.selected + step) % count
            if not self.items[candidate].is_disabled:
                self.set_selected(candidate)
                return

    def _visible_range(self) -> range:
        end = min(len(self.items), self.offset + MENU_VISIBLE_ROWS)
        return range(self.offset, end)

    def _draw(self) -> None:
        console, window, geometry = self.console, self.window, self.geometry

        console.cls(window)
        console.box(window)
        if self.title:
            console.move_cursor(geometry.title_x - 1, 0, window)
            console.print_glyph(Glyph.RTEE, window=window)
            console.print(self.title, Colour.CYAN, TextFlag.BOLD | TextFlag.RAW, window=window)
            console.print_glyph(Glyph.LTEE, window=window)
        if self.tag_left:
            console.print(self.tag_left, Colour.WHITE, TextFlag.BOLD | TextFlag.RAW,
                          geometry.tag_left_x, window.height - 1, window)
        if self.tag_right:
            console.print(self.tag_right, Colour.WHITE, TextFlag.BOLD | TextFlag.RAW,
                          geometry.tag_right_x, window.height - 1, window)

        visible = self._visible_range()
        for i in visible:
            item = self.items[i]
            flags = TextFlag.BOLD | TextFlag.RAW
            if i == self.selected:
                flags |= TextFlag.REVERSE
            console.print(item.text, item.colour, flags, item.x, 1 + i - self.offset, window)
        if self.offset > 0:
            console.print_glyph(Glyph.UARROW, Colour.GREEN, TextFlag.BOLD, window.width - 1, 1, window)
        if visible.stop < len(self.items):
            console.print_glyph(Glyph.DARROW, Colour.GREEN, TextFlag.BOLD,
                                window.width - 1, window.height - 2, window)

        if self.sidebox_enabled:
            sidebox = self.sidebox_window
            console.cls(sidebox)
            console.box(sidebox)
            text = self.items[self.selected].sidebox
            if text:
                for i, line in enumerate(self.splitter(text, MENU_SIDEBOX_WIDTH)):
                    console.print(line, flags=TextFlag.RAW, x=2, y=1 + i, window=sidebox)

        console.flip()

    def _move_selection(self, step: int) -> None:
        """Move one item up (-1) or down (+1), skipping separators and disabled items.

        If the search ends on a disabled item the move is abandoned.
        """
        last = len(self.items) - 1
        old_selected = self.selected
        self.selected += step
        while 0 < self.selected < last and (self.items[self.selected].is_separator
                                            or self.items[self.selected].is_disabled):
            self.selected += step
        if self.items[self.selected].is_disabled:
            self.selected = old_selected

    def _clamp_scroll(self) -> None:
        """Scroll a row at a time until the selection is visible."""
        # Skipping separators can move the selection several rows in one key
        # press, so stepping once is not enough to keep it on screen.
        while self.selected > self.offset + MENU_VISIBLE_ROWS - 1:
            self.offset += 1
        while self.selected < self.offset:
            self.offset -= 1

    def render(self) -> int:
        """Run the menu until an item is chosen or the menu is left.

        Returns:
            The chosen item index, or MENU_CANCEL, MENU_LEFT or MENU_RIGHT
        """
        if not self.items:
            return MENU_CANCEL

        self._skip_disabled_start()
        self.reposition()
        self.phase = MenuPhase.RENDERING
        console = self.console
        while True:
            self._draw()
            key = console.get_key(self.window)

            if key == console.resize_key:
                self.reposition()
                self.phase = MenuPhase.RENDERING
                continue
            elif console.is_up(key) and self.selected > 0:
                self._move_selection(-1)
            elif console.is_down(key) and self.selected < len(self.items) - 1:
                self._move_selection(1)
            elif console.is_left(key) and self.allow_left:
                return self._finish(MENU_LEFT)
            elif console.is_right(key) and self.allow_right:
                return self._finish(MENU_RIGHT)
            elif console.is_select(key):
                return self._finish(self.selected)
            elif console.is_cancel(key):
                return self._finish(MENU_CANCEL)

            self._clamp_scroll()

    def _finish(self, result: int) -> int:
        self.console.log_manager.menu(f"Menu closed with result {result}")
        if self.redraw_on_exit:
            self.close()
            self.console.flip()
        else:
            self.phase = MenuPhase.LAID_OUT
        return result

    def close(self) -> None:
        """Destroy the menu's windows; the next render lays it out again."""
        compositor = self.console.compositor
        compositor.destroy_window(self.sidebox_window)
        compositor.destroy_window(self.window)
        self.sidebox_window = None
        self.window = None
        self.phase = MenuPhase.IDLE
