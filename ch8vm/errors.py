#!/usr/bin/env python3

"""
Interpreter Errors

Every failure the interpreter core can report is a subclass of Chip8Error, so
a host can catch everything at once, or pick out the specific kind and decide
whether to halt, reset, or skip and continue.  The core never recovers by
itself.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"


class Chip8Error(Exception):
    pass


class RAMError(Chip8Error):
    pass


class StackError(Chip8Error):
    pass


class CPUError(Chip8Error):
    pass


class MemoryOutOfBounds(RAMError):
    pass


class StackOverflow(StackError):
    pass


class StackUnderflow(StackError):
    pass


class InvalidOpcode(CPUError):
    pass
