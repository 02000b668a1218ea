#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ch8vm.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers()

    def test_timers_init(self):
        self.assertEqual((0, 0), (self.timers.dt, self.timers.st))
        self.assertFalse(self.timers.sound_active())

    def test_timers_tick(self):
        self.timers.set_delay(2)
        self.timers.set_sound(1)
        self.timers.tick()
        self.assertEqual((1, 0), (self.timers.dt, self.timers.st))
        self.timers.tick()
        self.assertEqual((0, 0), (self.timers.dt, self.timers.st))

    def test_timers_floor(self):
        for _ in range(5):
            self.timers.tick()

        self.assertEqual((0, 0), (self.timers.dt, self.timers.st))

    def test_timers_sound_active(self):
        self.timers.set_sound(2)
        self.assertTrue(self.timers.sound_active())
        self.timers.tick()
        self.assertTrue(self.timers.sound_active())
        self.timers.tick()
        self.assertFalse(self.timers.sound_active())

    def test_timers_byte_values(self):
        self.timers.set_delay(0x1FF)
        self.assertEqual(0xFF, self.timers.dt)

    def test_timers_reset(self):
        self.timers.set_delay(5)
        self.timers.set_sound(5)
        self.timers.reset()
        self.assertEqual((0, 0), (self.timers.dt, self.timers.st))
