#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, and
loading program images.  Unlike the hardware it imitates, nothing here wraps
around: any access past the top of memory is reported to the caller as
MemoryOutOfBounds, because silently wrapping hides bugs in ROMs and in the
interpreter itself.

The bottom 0x200 bytes belong to the interpreter (the system font lives
there), so program images are never allowed to overwrite them.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEMORY_SIZE, RESERVED_TOP, PROGRAM_START
from .errors import RAMError, MemoryOutOfBounds  # noqa: F401


class RAM:
    def __init__(self):
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read16(self, location):
        # Opcodes are stored big-endian
        self.check_range(location, 2)
        return (self.mem[location] << 8) | self.mem[location + 1]

    def read_block(self, location, size=1):
        self.check_range(location, size)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_range(location, block_size)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise MemoryOutOfBounds("Memory access at 0x{:04x} is out of bounds".format(location))

    def check_range(self, location, size):
        # Validate a whole span up front, so multi-byte operations either complete or change nothing
        if size > 0:
            self.check_overflow(location)
            self.check_overflow(location + size - 1)

    def load(self, data, at=PROGRAM_START):
        if at < RESERVED_TOP:
            raise MemoryOutOfBounds(
                "Load address 0x{:03x} is inside the interpreter area (below 0x{:03x})".format(at, RESERVED_TOP)
            )

        available = self.mem_size - at

        if len(data) > available:
            raise MemoryOutOfBounds(
                "Program of {} bytes does not fit in the {} bytes available at 0x{:03x}".format(len(data), available, at)
            )

        # Everything outside the interpreter area and the new program must read back as zero
        self.zero_block(RESERVED_TOP, self.mem_size - RESERVED_TOP)
        self.write_block(at, data)

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_range(offset, size)
        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)


def new_system_ram():
    ram = RAM()
    ram.resize(MEMORY_SIZE)
    return ram
