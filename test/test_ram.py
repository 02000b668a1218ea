#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ch8vm.errors import Chip8Error
from ch8vm.ram import RAM, RAMError, MemoryOutOfBounds, new_system_ram


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM()
        self.ram.resize(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual("", ram.mem.hex())

    def test_ram_resize(self):
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())

    def test_ram_read16(self):
        self.ram.write_block(1, bytearray(b"\x12\x34"))
        self.assertEqual(0x1234, self.ram.read16(1))
        self.assertEqual(0x3400, self.ram.read16(2))

    def test_ram_byte_overflow(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.write, 5, 255)
        self.assertRaises(MemoryOutOfBounds, self.ram.read, 5)

    def test_ram_read16_overflow(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.read16, 4)

    def test_ram_block_overflow(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        # Nothing is written if any of the block falls outside
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_read_block_overflow(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.read_block, 3, 3)

    def test_ram_error_hierarchy(self):
        self.assertTrue(issubclass(MemoryOutOfBounds, RAMError))
        self.assertTrue(issubclass(MemoryOutOfBounds, Chip8Error))

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.assertEqual("fcfdfeff00", self.ram.mem.hex())
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())


class TestRAMLoad(unittest.TestCase):
    def setUp(self):
        self.ram = new_system_ram()

    def test_ram_system_size(self):
        self.assertEqual(0x1000, self.ram.mem_size)

    def test_ram_load_default_address(self):
        self.ram.load(b"\x60\x05")
        self.assertEqual(0x6005, self.ram.read16(0x200))

    def test_ram_load_fills_memory(self):
        self.ram.load(b"\x01" * 0xE00)
        self.assertEqual(0x01, self.ram.read(0xFFF))

    def test_ram_load_too_large(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.load, b"\x01" * 0xE01)

    def test_ram_load_alternate_address(self):
        self.ram.load(b"\x02" * 0x100, at=0xF00)
        self.assertEqual(0x02, self.ram.read(0xFFF))
        self.assertEqual(0x00, self.ram.read(0xEFF))
        self.assertRaises(MemoryOutOfBounds, self.ram.load, b"\x02" * 0x101, 0xF00)

    def test_ram_load_reserved_area(self):
        self.assertRaises(MemoryOutOfBounds, self.ram.load, b"\x01", 0x1FF)
        self.assertRaises(MemoryOutOfBounds, self.ram.load, b"\x01", 0x50)

    def test_ram_load_keeps_reserved_area(self):
        self.ram.write(0x50, 0xF0)
        self.ram.load(b"\x12\x34")
        self.assertEqual(0xF0, self.ram.read(0x50))

    def test_ram_load_zeroes_previous_program(self):
        self.ram.load(b"\xFF" * 4)
        self.ram.load(b"\x11")
        self.assertEqual(0x11, self.ram.read(0x200))
        self.assertEqual(0x00, self.ram.read(0x201))
        self.assertEqual(0x00, self.ram.read(0x203))
