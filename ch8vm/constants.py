#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Chippy8"
APP_VERSION = "0.3.0"
APP_COPYRIGHT = "Copyright (C) 2024 Chippy8 Developers, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEMORY_SIZE = 0x1000
RESERVED_TOP = 0x200    # 0x000 - 0x1FF belongs to the interpreter
FONT_ADDRESS = 0x50     # Small font glyphs occupy 0x50 - 0x9F
FONT_GLYPH_SIZE = 5
PROGRAM_START = 0x200
PC_MAX = 0xFFE

# Call stack
STACK_DEPTH = 16

# Display modes
LO_RES_SIZE = (64, 32)
HI_RES_SIZE = (128, 64)

# Clocks
TIMER_FREQ = 60.0                # Delay and sound timers always count down at 60Hz
TIMER_INTERVAL = 1.0 / TIMER_FREQ
DEFAULT_CLOCK_SPEED = 700        # Instructions per second
MAX_BACKLOG = 0.25               # Seconds of owed work kept when the host stalls

# Keypad
NUM_KEYS = 0x10

# Default mappings for keys 0-F, later populated into a dictionary.  Note that the keyscans (on a UK QWERTY keyboard)
# and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks, in the order they are offered on the command line
CPU_QUIRKS = ["shift", "shift_flag", "load", "index_increment", "index_overflow", "jump", "logic", "clip"]
