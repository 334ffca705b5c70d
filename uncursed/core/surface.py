from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Union

from .enums import Colour, Glyph, TextFlag


# Opaque per-surface handle for one rectangular drawing region.
# None always means the whole screen.
SurfaceHandle = Any


@dataclass
class SurfaceConfig:
    width: int = 80
    height: int = 24
    title: str = "uncursed"
    min_width: int = 80
    min_height: int = 24


class TerminalSurface(ABC):
    """The terminal primitives the toolkit is built on.

    Implementations own their handles, their glyph table and the cursor
    visibility state; the core never touches the terminal directly.
    """

    def __init__(self, config: Optional[SurfaceConfig] = None):
        self.config = config or SurfaceConfig()
        self._running = False
        self.cursor_visible = True

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @property
    @abstractmethod
    def key_codes(self) -> dict[str, int]:
        """Named special keys; must include "RESIZE"."""

    @abstractmethod
    def create_handle(self, x: int, y: int, width: int, height: int) -> SurfaceHandle:
        pass

    @abstractmethod
    def destroy_handle(self, handle: SurfaceHandle) -> None:
        pass

    @abstractmethod
    def move_handle(self, handle: SurfaceHandle, x: int, y: int) -> None:
        pass

    @abstractmethod
    def top_handle(self, handle: SurfaceHandle) -> None:
        pass

    @abstractmethod
    def set_handle_visible(self, handle: SurfaceHandle, visible: bool) -> None:
        pass

    @abstractmethod
    def get_size(self, handle: SurfaceHandle = None) -> tuple[int, int]:
        pass

    @abstractmethod
    def get_cursor(self, handle: SurfaceHandle = None) -> tuple[int, int]:
        pass

    @abstractmethod
    def set_cursor_position(self, handle: SurfaceHandle, x: int, y: int) -> None:
        pass

    @abstractmethod
    def clear(self, handle: SurfaceHandle = None) -> None:
        pass

    @abstractmethod
    def clear_to_eol(self, handle: SurfaceHandle = None) -> None:
        pass

    @abstractmethod
    def draw_box(self, handle: SurfaceHandle, colour: Colour = Colour.NONE,
                 flags: TextFlag = TextFlag.NONE) -> None:
        pass

    @abstractmethod
    def write(self, handle: SurfaceHandle, text: str, colour: Colour = Colour.NONE,
              flags: TextFlag = TextFlag.NONE) -> None:
        """Write text at the cursor with no wrapping of its own."""

    @abstractmethod
    def write_char(self, handle: SurfaceHandle, char: Union[int, Glyph], colour: Colour = Colour.NONE,
                   flags: TextFlag = TextFlag.NONE) -> None:
        pass

    @abstractmethod
    def read_key(self, handle: SurfaceHandle = None) -> int:
        """Block until a key arrives; a resize is reported as key_codes["RESIZE"]."""

    @abstractmethod
    def read_line(self, handle: SurfaceHandle = None, max_length: int = 255) -> str:
        pass

    @abstractmethod
    def flush_input(self) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @abstractmethod
    def _apply_cursor(self, visible: bool) -> None:
        pass

    def set_window_title(self, title: str) -> None:
        # Most terminals offer no portable way to do this.
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def resize_key(self) -> int:
        return self.key_codes["RESIZE"]

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()

    def set_cursor(self, visible: bool) -> None:
        self.cursor_visible = visible
        self._apply_cursor(visible)

    def get_screen_size(self) -> tuple[int, int]:
        width, height = self.get_size(None)
        return (max(width, self.config.min_width), max(height, self.config.min_height))
