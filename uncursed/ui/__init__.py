from .menu import MENU_CANCEL, MENU_LEFT, MENU_RIGHT, Menu, MenuGeometry, MenuItem, MenuPhase

__all__ = [
    "MENU_CANCEL",
    "MENU_LEFT",
    "MENU_RIGHT",
    "Menu",
    "MenuGeometry",
    "MenuItem",
    "MenuPhase",
]
