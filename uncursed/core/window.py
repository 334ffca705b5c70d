"""
Windows and their composition on a terminal surface.

A Window wraps one surface handle and, optionally, a border Window drawn as a
box around it. Windows never change size: new geometry means a new Window.
The compositor tracks the stacking order, where the most recently created or
raised window is on top.
"""
from typing import Optional

from .enums import Colour, TextFlag
from .log_manager import LogManager
from .surface import SurfaceHandle, TerminalSurface


# Offsets between a border window and the content it surrounds.
BORDER_EXTRA_WIDTH = 4
BORDER_EXTRA_HEIGHT = 2
BORDER_OFFSET_X = 2
BORDER_OFFSET_Y = 1


class Window:
    """A rectangular drawing region that owns its surface handle."""

    def __init__(self, surface: TerminalSurface, width: int, height: int,
                 x: int = 0, y: int = 0, border: bool = False):
        self.surface = surface
        self.border: Optional[Window] = None
        if border:
            self.border = Window(surface, width, height, x, y)
            surface.draw_box(self.border.handle)
            width -= BORDER_EXTRA_WIDTH
            height -= BORDER_EXTRA_HEIGHT
            x += BORDER_OFFSET_X
            y += BORDER_OFFSET_Y
        if width < 1 or height < 1:
            if self.border:
                self.border.destroy()
            raise ValueError(f"Window size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.x = x
        self.y = y
        self.handle: Optional[SurfaceHandle] = surface.create_handle(x, y, width, height)

    def __repr__(self) -> str:
        return (f"Window({self.width}x{self.height} at {self.x},{self.y}"
                f"{', bordered' if self.border else ''})")

    def __enter__(self) -> "Window":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.destroy()

    @property
    def is_alive(self) -> bool:
        return self.handle is not None

    @property
    def midcol(self) -> int:
        return self.width // 2

    @property
    def midrow(self) -> int:
        return self.height // 2

    def destroy(self) -> None:
        """Release the content handle, then the border window. Safe to repeat."""
        if self.handle is not None:
            self.surface.destroy_handle(self.handle)
            self.handle = None
        if self.border is not None:
            self.border.destroy()
            self.border = None

    def _require_alive(self) -> None:
        if self.handle is None:
            raise ValueError(f"{self!r} has been destroyed")

    def move(self, x: int, y: int) -> None:
        self._require_alive()
        if self.border is not None:
            self.border.move(x - BORDER_OFFSET_X, y - BORDER_OFFSET_Y)
        self.x = x
        self.y = y
        self.surface.move_handle(self.handle, x, y)

    def raise_to_top(self) -> None:
        self._require_alive()
        if self.border is not None:
            self.border.raise_to_top()
        self.surface.top_handle(self.handle)

    def set_visible(self, visible: bool) -> None:
        self._require_alive()
        if self.border is not None:
            self.border.set_visible(visible)
        self.surface.set_handle_visible(self.handle, visible)

    def redraw_border(self, colour: Colour = Colour.NONE) -> bool:
        """Redraw the border box, if this window has one.

        Returns:
            bool: False when there is no border to draw
        """
        if self.border is None:
            return False
        self.surface.draw_box(self.border.handle, colour, TextFlag.NONE)
        return True


class WindowCompositor:
    """Creates, stacks and disposes of the windows on one surface."""

    def __init__(self, surface: TerminalSurface, log_manager: Optional[LogManager] = None):
        self.surface = surface
        self.log_manager = log_manager
        self._stack: list[Window] = []

    @property
    def windows(self) -> list[Window]:
        """Live windows, bottom of the stack first."""
        return list(self._stack)

    def create_window(self, width: int, height: int, x: int = 0, y: int = 0,
                      with_border: bool = False) -> Window:
        window = Window(self.surface, width, height, x, y, border=with_border)
        self._stack.append(window)
        self._log_window(f"Created {window!r}")
        return window

    def destroy_window(self, window: Optional[Window]) -> None:
        if window is None:
            return
        if window in self._stack:
            self._stack.remove(window)
        if window.is_alive:
            self._log_window(f"Destroyed {window!r}")
        window.destroy()

    def replace_window(self, old: Optional[Window], width: int, height: int, x: int = 0, y: int = 0,
                       with_border: bool = False) -> Window:
        """Discard old (if any) and build a window with the new geometry."""
        self.destroy_window(old)
        return self.create_window(width, height, x, y, with_border)

    def move_window(self, window: Window, x: int, y: int) -> None:
        window.move(x, y)
        self._log_window(f"Moved {window!r}")

    def raise_window(self, window: Window) -> None:
        window.raise_to_top()
        if window in self._stack:
            self._stack.remove(window)
            self._stack.append(window)

    def set_visible(self, window: Window, visible: bool) -> None:
        window.set_visible(visible)

    def redraw_border(self, window: Window, colour: Colour = Colour.NONE) -> None:
        if not window.redraw_border(colour) and self.log_manager is not None:
            self.log_manager.warning("Attempt to re-render window border, with no border defined.")

    def destroy_all(self) -> None:
        for window in reversed(self._stack):
            window.destroy()
        self._stack.clear()

    def _log_window(self, text: str) -> None:
        if self.log_manager is not None:
            self.log_manager.window(text)
