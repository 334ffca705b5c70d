"""
Basic test fixtures for the uncursed test suite.

Provides a headless surface and the objects built on it, so tests can drive
windows and menus without a terminal.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from uncursed.core.console import Console
from uncursed.core.log_manager import LogLevel, LogManager
from uncursed.core.surface import SurfaceConfig
from uncursed.core.window import WindowCompositor
from uncursed.renderers.buffer_surface import BufferSurface


@pytest.fixture
def surface():
    """Create a started 80x24 headless surface."""
    buffer_surface = BufferSurface(SurfaceConfig(width=80, height=24))
    buffer_surface.start()
    return buffer_surface


@pytest.fixture
def log_manager():
    """Create a log manager that keeps debug output visible."""
    return LogManager(default_level=LogLevel.DEBUG)


@pytest.fixture
def compositor(surface, log_manager):
    """Create a window compositor on the headless surface."""
    return WindowCompositor(surface, log_manager)


@pytest.fixture
def console(surface, log_manager):
    """Create a console with the default key bindings."""
    return Console(surface, log_manager=log_manager)
