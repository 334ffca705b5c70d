"""uncursed - windows, text layout and scrollable menus for the terminal."""

from .core.console import Console
from .core.enums import Colour, Glyph, MenuFlag, TextAlign, TextFlag, parse_colour, parse_flags
from .core.log_manager import LogCategory, LogLevel, LogManager
from .core.surface import SurfaceConfig, TerminalSurface
from .core.text_layout import print_wrapped, split_from_cursor, wrap_to_width
from .core.window import Window, WindowCompositor
from .ui.menu import MENU_CANCEL, MENU_LEFT, MENU_RIGHT, Menu

__all__ = [
    "Console",
    "Colour",
    "Glyph",
    "MenuFlag",
    "TextAlign",
    "TextFlag",
    "parse_colour",
    "parse_flags",
    "LogCategory",
    "LogLevel",
    "LogManager",
    "SurfaceConfig",
    "TerminalSurface",
    "print_wrapped",
    "split_from_cursor",
    "wrap_to_width",
    "Window",
    "WindowCompositor",
    "MENU_CANCEL",
    "MENU_LEFT",
    "MENU_RIGHT",
    "Menu",
]
