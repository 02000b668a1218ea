#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from ch8vm.debugger import Debugger
from ch8vm.machine import Machine


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.machine = Machine(debugger=self.debugger)
        self.cpu = self.machine.cpu

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_debug(self):
        self.cpu.v[0x0] = 0x1
        self.cpu.v[0xF] = 0xAB
        self.cpu.i = 0x123
        self.machine.timers.set_delay(0x5)
        self.assertEqual(
            "V: 0xab" + "00" * 14 + "01 I: 0x0123 DT: 0x05 ST: 0x00 PC: 0x200 OP: 0x0000 IN: CLS",
            self.debugger.debug(self.cpu, "CLS")
        )

    def test_debugger_debug_verbose(self):
        self.machine.stack.push(0x202)
        self.machine.stack.push(0x30a)
        debug_str = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("\nStack: 0x202 0x30a\nState: running\n", debug_str)

    def test_debugger_debug_verbose_empty_stack(self):
        debug_str = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertTrue(
            debug_str.endswith("\nStack: (Empty)\nState: running\nKeys: (None)\nDisplay: 64x32, 0 pixels lit")
        )

    def test_debugger_output(self):
        debugger = Debugger()
        debugger.set_live(True)
        machine = Machine(debugger=debugger)
        machine.load_rom(b"\x61\x2f\xf2\x0a")
        output = io.StringIO()

        with redirect_stdout(output):
            machine.step()
            machine.step()

        lines = output.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].endswith("PC: 0x200 OP: 0x612f IN: LD V1, 0x2f"))
        self.assertTrue(lines[1].endswith("PC: 0x202 OP: 0xf20a IN: LD V2, K"))

    def test_debugger_debug_verbose_keys_and_display(self):
        self.machine.set_key(0x3, True)
        self.machine.set_key(0xA, True)
        self.machine.framebuffer.xor_pixel(5, 5)
        self.machine.framebuffer.xor_pixel(6, 5)
        debug_str = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertTrue(debug_str.endswith("\nKeys: 3 a\nDisplay: 64x32, 2 pixels lit"))
