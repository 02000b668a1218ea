#!/usr/bin/env python3

__author__ = "Chippy8 Developers"
__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "0.3.0"

from argparse import ArgumentParser
from ch8vm import main
from ch8vm.constants import DEFAULT_KEYMAP, DEFAULT_CLOCK_SPEED, CPU_QUIRKS


def parse_address(text):
    # Accept "512", "0x200" or "0o1000"
    return int(text, 0)


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in instructions/second (default {}).  Timers always run at 60Hz".format(
            DEFAULT_CLOCK_SPEED
        )
    )
    parser.add_argument(
        "-l", "--load_address", type=parse_address,
        help="load the ROM at this address instead of 0x200 (must not be below 0x200)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-f", "--smoothing", type=int, default=0,
        help="define the number of smoothing filter passes for higher quality rendering (default 0)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--hires", action="store_true", default=False,
        help="enable the Super-CHIP 128x64 display mode instructions (00FE/00FF)"
    )
    parser.add_argument(
        "-p", "--paused", action="store_true", default=False,
        help="start with the instruction clock paused.  Timers, display and inputs keep running"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 000000,33FF66"
    )

    for cpu_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(cpu_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(cpu_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run():
    # It is possible to start the emulator from a GUI by calling main() with a dictionary
    main(vars(parse_args()))


if __name__ == "__main__":
    run()
