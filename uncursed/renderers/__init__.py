from .buffer_surface import BufferSurface, InputExhausted
from .curses_surface import CursesSurface

__all__ = [
    "BufferSurface",
    "InputExhausted",
    "CursesSurface",
]
