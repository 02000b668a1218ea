#!/usr/bin/env python3

"""
Keypad Emulator

Holds the state of the 16-key hexadecimal keypad.  Only the host's input
plugin writes to it (via set_key), between CPU steps.  The CPU reads it for
Ex9E/ExA1, and uses the press latch to resolve an Fx0A keypress wait.

The latch records the most recent key to go from released to pressed.  Fx0A
clears it when the wait begins, so a key that was already held down does not
satisfy the wait until it is pressed again.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def set_key(self, key, pressed):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} does not exist on the keypad".format(key))

        pressed = bool(pressed)

        if pressed and not self.key_down[key]:
            self.last_keypress = key

        self.key_down[key] = pressed

    def is_key_down(self, key):
        # Only the low nibble of a register selects a key
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def release_all(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False

        self.last_keypress = None

    def snapshot(self):
        return tuple(self.key_down)
