"""
Input configuration.

Loads key bindings from YAML so menus can be driven with arrow keys,
WASD, vi keys or anything else.
"""

from .key_config_loader import KeyConfigLoader

__all__ = [
    'KeyConfigLoader'
]
