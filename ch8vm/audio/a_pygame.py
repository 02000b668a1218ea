#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a square wave tone within PyGame / SDL while the buzzer is enabled.

One cycle of the wave is built as an unsigned 8-bit mono sample, and looped
for as long as the sound timer keeps the buzzer on.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_TONE = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, frequency=DEFAULT_TONE):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=self.build_square_wave(frequency))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    @staticmethod
    def build_square_wave(frequency):
        # High for the first half of the cycle, low for the second
        cycle_length = max(2, int(PLAYBACK_FREQUENCY / frequency))
        half_cycle = cycle_length // 2
        return bytes((0xFF if pos < half_cycle else 0x00) for pos in range(cycle_length))

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer, i.e. play or stop looping the tone.  If the tone is already playing, it won't
        # be restarted.
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
