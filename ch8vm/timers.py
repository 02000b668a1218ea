#!/usr/bin/env python3

"""
Timer Emulator

The delay (DT) and sound (ST) timers count down by one, 60 times a second,
until they reach zero.  They run on their own clock: the host calls tick()
at 60Hz however fast (or slowly) instructions are executing, including while
the CPU is waiting for a keypress.

Instructions only ever read DT, or load new values into DT and ST.  The buzzer
should sound whenever ST is above zero.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.reset()

    def reset(self):
        self.dt = 0  # Delay timer (byte)
        self.st = 0  # Sound timer (byte)

    def tick(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.st = value & 0xFF

    def sound_active(self):
        return self.st > 0
