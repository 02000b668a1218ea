#!/usr/bin/env python3

"""
PyGame Input Plugin

Unlike the Curses plugin, this scans the keyboard and properly detects key
'press' and 'release' events.  Note that the check should not be called more
often than 60Hz, as constantly checking the queue is time consuming.

Closing the window or pressing ESC asks the scheduler to quit.  F5 pauses or
resumes the instruction clock, and F6 executes one instruction while paused.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase, CMD_TOGGLE_PAUSE, CMD_STEP


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }
        self.host_keys = {
            pygame.K_F5: CMD_TOGGLE_PAUSE,
            pygame.K_F6: CMD_STEP
        }

        super().__init__(keymap, renderer)

    def process_messages(self, keypad):
        # Call PyGame method based on fast dictionary lookup of event
        quit_program = False

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method and pygame_method(event, keypad):  # Check via short circuit that we don't have 'None'
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def _pygame_quit(self, event, keypad):  # pylint: disable=unused-argument
        return True

    def _pygame_keydown(self, event, keypad):
        if event.key == pygame.K_ESCAPE:
            return True

        host_command = self.host_keys.get(event.key)

        if host_command is not None:
            self.commands.append(host_command)
            return False

        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            keypad.set_key(hex_key, True)

        return False

    def _pygame_keyup(self, event, keypad):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            keypad.set_key(hex_key, False)

        return False
