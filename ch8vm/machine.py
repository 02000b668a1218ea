#!/usr/bin/env python3

"""
Machine

Wires RAM, stack, framebuffer, keypad, timers and CPU together, and is the
only surface a host should need:

    machine = Machine()
    machine.load_rom(data)
    machine.step()            # at the chosen instruction rate
    machine.tick_timers()     # at 60Hz, always
    machine.set_key(0xA, True)
    machine.framebuffer_snapshot()
    machine.sound_active()

Every failure is raised as a Chip8Error subclass.  Whether to halt, reset,
or carry on is up to the host.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT_ADDRESS, PROGRAM_START, STACK_DEPTH
from .cpu import CPU
from .debugger import Debugger
from .fonts import SYSTEM_FONT
from .framebuffer import Framebuffer
from .keypad import Keypad
from .quirks import Quirks
from .ram import new_system_ram
from .stack import Stack
from .timers import Timers


class Machine:
    def __init__(self, quirks=None, allow_hires=False, rng=None, debugger=None):
        self.ram = new_system_ram()
        self.stack = Stack(STACK_DEPTH)
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.timers = Timers()
        self.debugger = Debugger() if debugger is None else debugger
        self.cpu = CPU(
            self.ram, self.stack, self.framebuffer, self.keypad, self.timers, self.debugger,
            quirks=Quirks() if quirks is None else quirks, allow_hires=allow_hires, rng=rng
        )
        self.reset()

    def reset(self, start_location=PROGRAM_START):
        # Back to power-on state.  Any program has to be loaded again
        self.ram.clear()
        self.ram.write_block(FONT_ADDRESS, SYSTEM_FONT)
        self.stack.clear()
        self.keypad.release_all()
        self.timers.reset()
        self.cpu.reset(start_location)

    def load_rom(self, data, at=PROGRAM_START):
        self.ram.load(data, at)
        self.stack.clear()
        self.timers.reset()
        self.cpu.reset(at)

    def step(self):
        self.cpu.step()

    def tick_timers(self):
        self.timers.tick()

    def framebuffer_snapshot(self):
        return self.framebuffer.snapshot()

    def set_key(self, index, pressed):
        self.keypad.set_key(index, pressed)

    def sound_active(self):
        return self.timers.sound_active()

    def is_awaiting_key(self):
        return self.cpu.is_awaiting_key()

    @property
    def quirk_config(self):
        return self.cpu.quirks

    @quirk_config.setter
    def quirk_config(self, quirks):
        self.cpu.quirks = quirks
