#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ch8vm.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer(4, 5)

    def test_framebuffer_default_size(self):
        self.assertEqual((64, 32), Framebuffer().get_vid_size())

    def test_framebuffer_resize_vid(self):
        fb = self.framebuffer
        self.assertEqual((4, 5), fb.get_vid_size())
        fb.xor_pixel(1, 1)
        fb.resize_vid(128, 64)
        self.assertEqual((128, 64), fb.get_vid_size())
        self.assertEqual(0, fb.lit_pixels())
        self.assertRaises(FramebufferError, fb.resize_vid, 0, 32)

    def test_framebuffer_writes(self):
        fb = self.framebuffer
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", fb.vram.mem.hex())

        # Drawing over a lit pixel turns it off and reports the collision
        self.assertTrue(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000000000000000000000000000000000", fb.vram.mem.hex())

    def test_framebuffer_wrapping(self):
        fb = self.framebuffer
        self.assertFalse(fb.xor_pixel(4, 5))  # Wraps to 0, 0
        self.assertTrue(fb.snapshot()[0][0])
        self.assertTrue(fb.xor_pixel(8, 10))
        self.assertFalse(fb.snapshot()[0][0])

    def test_framebuffer_clipping(self):
        fb = self.framebuffer
        self.assertIsNone(fb.xor_pixel(4, 5, wrap=False))
        self.assertEqual(0, fb.lit_pixels())

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.xor_pixel(2, 3)
        fb.xor_pixel(3, 4)
        fb.clear()
        self.assertEqual("0000000000000000000000000000000000000000", fb.vram.mem.hex())

    def test_framebuffer_snapshot(self):
        fb = self.framebuffer
        fb.xor_pixel(1, 2)
        snapshot = fb.snapshot()
        self.assertEqual(5, len(snapshot))
        self.assertEqual(4, len(snapshot[0]))
        self.assertEqual((False, True, False, False), snapshot[2])
        self.assertIsInstance(snapshot, tuple)

        # Later draws don't alter a snapshot already taken
        fb.xor_pixel(0, 0)
        self.assertFalse(snapshot[0][0])

    def test_framebuffer_dirty(self):
        fb = self.framebuffer
        self.assertTrue(fb.consume_dirty())  # Newly sized
        self.assertFalse(fb.consume_dirty())
        fb.xor_pixel(0, 0)
        self.assertTrue(fb.consume_dirty())
        fb.clear()
        self.assertTrue(fb.consume_dirty())
