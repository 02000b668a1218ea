#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program.  This means we can simply wrap lists
to fully (and quickly) emulate it.

The depth is fixed when the stack is created (16 return addresses).  Pushing
past it or popping an empty stack raises, rather than clamping, so the running
program's fault is reported to the host.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH
from .errors import StackError, StackOverflow, StackUnderflow  # noqa: F401


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow (depth {})".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow") from None

    def peek(self):
        # Inspect the next return address without removing it
        if not self.items:
            raise StackUnderflow("Stack underflow")

        return self.items[-1]

    def is_full(self):
        return len(self.items) >= self.size

    def depth(self):
        return len(self.items)

    def clear(self):
        self.items = []

    def get_items(self):
        # For debugging
        return self.items
