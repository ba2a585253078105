"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Host layout      Keypad
#  1 2 3 4          1 2 3 C
#  q w e r          4 5 6 D
#  a s d f          7 8 9 E
#  z x c v          A 0 B F
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    # QWERTZ keyboards swap y and z
    "y": "z",
}


@dataclass
class Keypad:
    """Sixteen key levels written by the host between cycles.

    Host key names are reference counted, so two host keys mapped to the same
    keypad key (``z`` and its alias ``y``) keep it down until both are up.
    """

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT, init=False, repr=False)
    _active: Dict[int, int] = field(default_factory=dict, init=False, repr=False)

    def press(self, key_name: str) -> None:
        index = self.lookup(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return
        self._keys[index] = True
        self._active[index] = self._active.get(index, 0) + 1
        if debug_enabled("input"):
            debug_log("input", "key_press name=%s key=%X", key_name, index)

    def release(self, key_name: str) -> None:
        index = self.lookup(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return
        count = self._active.get(index, 0)
        if count <= 1:
            self._keys[index] = False
            self._active.pop(index, None)
        else:
            self._active[index] = count - 1
        if debug_enabled("input"):
            debug_log("input", "key_release name=%s key=%X count=%d", key_name, index, self._active.get(index, 0))

    def set_key(self, index: int, pressed: bool) -> None:
        """Write the level of a key directly, bypassing the host key map."""

        self._check_index(index)
        self._keys[index] = pressed
        self._active.pop(index, None)
        if pressed:
            self._active[index] = 1

    def is_pressed(self, index: int) -> bool:
        self._check_index(index)
        return self._keys[index]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key index, or None."""

        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def reset(self) -> None:
        self._keys[:] = [False] * KEY_COUNT
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def lookup(self, key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return KEY_MAP.get(name)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < KEY_COUNT:
            raise IndexError(f"key index {index} outside 0-{KEY_COUNT - 1}")
