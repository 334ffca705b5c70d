#!/usr/bin/env python3

from uncursed.core.console import Console
from uncursed.core.enums import Colour, MenuFlag
from uncursed.core.input_system import KeyConfigLoader
from uncursed.core.log_manager import LogManager
from uncursed.core.surface import SurfaceConfig
from uncursed.renderers.curses_surface import CursesSurface
from uncursed.ui.menu import MENU_CANCEL, MENU_LEFT, MENU_RIGHT, Menu


def main():
    config = SurfaceConfig(
        width=80,
        height=24,
        title="uncursed demo"
    )

    surface = CursesSurface(config)
    log_manager = LogManager()
    loader = KeyConfigLoader(log_manager=log_manager)
    loader.load_config()

    console = Console(surface, loader.get_bindings(surface.key_codes), log_manager)
    console.init()
    console.set_cursor(False)
    console.set_window_title(config.title)

    menu = Menu(console)
    menu.set_title("Demo")
    menu.set_tags("<- prev", "next ->")
    menu.allow_left_right(MenuFlag.LEFT | MenuFlag.RIGHT)
    menu.set_sidebox(True)
    menu.add_item("Open", Colour.WHITE, "Opens something. This text is wrapped to fit the side panel.")
    menu.add_item("Disabled", Colour.BLACK, "Cannot be chosen.")
    menu.add_item("")
    menu.add_item("Quit", Colour.RED, "Leaves the demo.")

    try:
        result = menu.render()
    finally:
        console.shutdown()

    names = {MENU_CANCEL: "cancelled", MENU_LEFT: "left", MENU_RIGHT: "right"}
    print(f"Menu result: {names.get(result, result)}")


if __name__ == "__main__":
    main()
