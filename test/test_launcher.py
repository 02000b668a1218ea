#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from chippy8 import parse_address, parse_args
from ch8vm import main, select_plugins, StartupError
from ch8vm.errors import InvalidOpcode, MemoryOutOfBounds
from ch8vm.inputs.i_null import Inputs
from ch8vm.renderers.r_null import Renderer
from ch8vm.audio.a_null import Audio


class TestLauncher(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.rom_filename = os.path.join(self.temp_dir.name, "test.ch8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write_rom(self, data):
        with open(self.rom_filename, "wb") as f:
            f.write(data)

    def test_launcher_parse_address(self):
        self.assertEqual(0x200, parse_address("512"))
        self.assertEqual(0x600, parse_address("0x600"))
        self.assertRaises(ValueError, parse_address, "zero")

    def test_launcher_parse_args_defaults(self):
        args = vars(parse_args(["game.ch8"]))
        self.assertEqual("game.ch8", args["filename"])
        self.assertEqual(700, args["clock_speed"])
        self.assertIsNone(args["load_address"])
        self.assertIsNone(args["renderer"])
        self.assertIsNone(args["shift_quirks"])
        self.assertIsNone(args["clip_quirks"])
        self.assertFalse(args["hires"])
        self.assertFalse(args["paused"])
        self.assertFalse(args["debug"])

    def test_launcher_parse_args_options(self):
        args = vars(
            parse_args(
                ["game.ch8", "-c", "1000", "-l", "0x300", "-r", "null", "--hires", "--jump_quirks", "1", "--paused"]
            )
        )
        self.assertEqual(1000, args["clock_speed"])
        self.assertEqual(0x300, args["load_address"])
        self.assertEqual("null", args["renderer"])
        self.assertEqual(1, args["jump_quirks"])
        self.assertTrue(args["hires"])
        self.assertTrue(args["paused"])

    def test_launcher_select_plugins(self):
        self.assertEqual((Renderer, Inputs, Audio), select_plugins("null", None))
        self.assertRaises(StartupError, select_plugins, "vga", None)

    def test_launcher_main_halts_on_invalid_opcode(self):
        self._write_rom(b"\x60\x01\xff\xff")
        args = vars(parse_args([self.rom_filename, "-r", "null"]))

        with redirect_stdout(io.StringIO()):
            self.assertRaises(InvalidOpcode, main, args)

    def test_launcher_main_rejects_reserved_load_address(self):
        self._write_rom(b"\x00\xe0")
        args = vars(parse_args([self.rom_filename, "-r", "null", "-l", "0x100"]))

        with redirect_stdout(io.StringIO()):
            self.assertRaises(MemoryOutOfBounds, main, args)
