#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and the screen can be
cleared.  Those are the only two ways pixels ever change, and the CPU is the
only thing that asks for them.

Collisions (where any pixel was set, but was unset by an XOR) are reported
back to the caller so the CPU can set Vf.

Renderers never touch the pixels.  They take a read-only snapshot, and can use
consume_dirty() to skip frames where nothing was drawn.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import LO_RES_SIZE
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=LO_RES_SIZE[0], vid_height=LO_RES_SIZE[1]):
        self.vram = RAM()
        self.vid_width = 0
        self.vid_height = 0
        self.vid_size = 0
        self.dirty = False
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display must be at least one pixel in each direction")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = self.vid_width * self.vid_height
        self.vram.resize(self.vid_size)  # Resizing also blanks the screen
        self.dirty = True

    def clear(self):
        self.vram.clear()
        self.dirty = True

    def xor_pixel(self, x, y, wrap=True):
        # Returns True if a lit pixel was switched off, False if not, or None if clipped off the screen

        if wrap:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ 1)
        self.dirty = True

        return pixel != 0

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def snapshot(self):
        # Rows of booleans, top row first.  Tuples, so nothing downstream can draw into the framebuffer
        mem = self.vram.mem
        width = self.vid_width
        return tuple(
            tuple(pixel != 0 for pixel in mem[row:row + width])
            for row in range(0, self.vid_size, width)
        )

    def lit_pixels(self):
        return sum(1 for pixel in self.vram.mem if pixel)

    def consume_dirty(self):
        dirty = self.dirty
        self.dirty = False
        return dirty
