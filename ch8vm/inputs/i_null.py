#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins translate host keyboard events into keypad state, through the
keypad's set_key() method only.  The keymap is a comma-separated list of 16
host key codes, for keypad keys 0 to F in order.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS

# Host commands for the scheduler, queued alongside keypad updates
CMD_TOGGLE_PAUSE = "toggle pause"
CMD_STEP = "step"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer, force_lowercase=False):
        self.keymap_dict = {}
        self.renderer = renderer
        self.commands = []
        keymap_split = keymap.split(",")

        if len(keymap_split) != NUM_KEYS:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if force_lowercase:
                # If we are working with characters rather than keyscan codes, we should convert to lowercase
                key_defined_ord = ord(chr(key_defined_ord).lower())

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self, keypad):  # pylint: disable=unused-argument
        return False  # Don't exit the program

    def take_commands(self):
        commands = self.commands
        self.commands = []
        return commands

    def shutdown(self):
        pass
