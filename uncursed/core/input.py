from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class KeyAction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    CANCEL = "cancel"


# Plain ASCII keys that every surface reports the same way.
ASCII_KEY_CODES = {
    "SPACE": ord(" "),
    "ENTER": ord("\n"),
    "RETURN": ord("\r"),
    "ESCAPE": 27,
    "TAB": ord("\t"),
    "BACKSPACE": 127,
}

DEFAULT_KEY_NAMES: dict[KeyAction, list[str]] = {
    KeyAction.UP: ["UP", "w", "W"],
    KeyAction.DOWN: ["DOWN", "s", "S"],
    KeyAction.LEFT: ["LEFT", "a", "A"],
    KeyAction.RIGHT: ["RIGHT", "d", "D"],
    KeyAction.SELECT: ["SPACE", "ENTER", "RETURN"],
    KeyAction.CANCEL: ["ESCAPE"],
}


def resolve_key_name(name: Union[str, int], key_codes: dict[str, int]) -> Optional[int]:
    """Turn a key name from config into a key code.

    Single characters map to their ordinal (case is kept, so "w" and "W" are
    different keys); longer names are looked up case-insensitively in the
    surface's special keys, then in the ASCII names. Integers pass through.
    """
    if isinstance(name, int):
        return name
    if len(name) == 1:
        return ord(name)
    upper = name.strip().upper()
    if upper in key_codes:
        return key_codes[upper]
    return ASCII_KEY_CODES.get(upper)


@dataclass
class KeyBindings:
    """Maps raw key codes to the logical actions the toolkit understands."""
    bindings: dict[KeyAction, set[int]] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: dict[KeyAction, list[Union[str, int]]],
                   key_codes: dict[str, int]) -> "KeyBindings":
        """Build bindings from key names; names that do not resolve are dropped."""
        bindings = {}
        for action, key_names in names.items():
            codes = {resolve_key_name(name, key_codes) for name in key_names}
            codes.discard(None)
            bindings[action] = codes
        return cls(bindings)

    @classmethod
    def default(cls, key_codes: dict[str, int]) -> "KeyBindings":
        return cls.from_names(DEFAULT_KEY_NAMES, key_codes)

    def matches(self, key: int, action: KeyAction) -> bool:
        return key in self.bindings.get(action, ())

    def action_for(self, key: int) -> Optional[KeyAction]:
        for action, codes in self.bindings.items():
            if key in codes:
                return action
        return None

    def is_up(self, key: int) -> bool:
        return self.matches(key, KeyAction.UP)

    def is_down(self, key: int) -> bool:
        return self.matches(key, KeyAction.DOWN)

    def is_left(self, key: int) -> bool:
        return self.matches(key, KeyAction.LEFT)

    def is_right(self, key: int) -> bool:
        return self.matches(key, KeyAction.RIGHT)

    def is_select(self, key: int) -> bool:
        return self.matches(key, KeyAction.SELECT)

    def is_cancel(self, key: int) -> bool:
        return self.matches(key, KeyAction.CANCEL)
