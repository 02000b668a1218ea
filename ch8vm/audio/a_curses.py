#!/usr/bin/env python3

"""
Curses Audio Plugin

Allows beeps to be played in the Terminal window (no sampled sound)!

The scheduler only switches the buzzer when sound_active() changes, so one beep
sounds each time the sound timer is loaded from zero.  Beeps cannot be stopped
since they are effectively just a CTRL+G (character 7 - BEL).
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def enable_buzzer(self, enabled):
        # Beep on the off-to-on transition only
        if enabled and not self.buzzer_enabled:
            curses.beep()

        super().enable_buzzer(enabled)
