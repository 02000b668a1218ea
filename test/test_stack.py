#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ch8vm.stack import Stack, StackError, StackOverflow, StackUnderflow


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack(3)

    def _populate_stack(self):
        self.stack.push(0x0)
        self.stack.push(0x1)
        self.stack.push(0xFFE)

    def test_stack_default_depth(self):
        self.assertEqual(16, Stack().size)

    def test_stack_push_pop(self):
        self._populate_stack()
        self.assertEqual(3, self.stack.depth())
        self.assertEqual(0xFFE, self.stack.pop())
        self.assertEqual(0x1, self.stack.pop())
        self.assertEqual(0x0, self.stack.pop())
        self.assertEqual(0, self.stack.depth())

    def test_stack_overflow(self):
        self._populate_stack()
        self.assertTrue(self.stack.is_full())
        self.assertRaises(StackOverflow, self.stack.push, 0x1)
        self.assertEqual(3, self.stack.depth())

    def test_stack_underflow(self):
        self.assertRaises(StackUnderflow, self.stack.pop)
        self.assertRaises(StackUnderflow, self.stack.peek)
        self.assertTrue(issubclass(StackUnderflow, StackError))

    def test_stack_peek(self):
        self._populate_stack()
        self.assertEqual(0xFFE, self.stack.peek())
        self.assertEqual(3, self.stack.depth())

    def test_stack_clear(self):
        self._populate_stack()
        self.stack.clear()
        self.assertEqual([], self.stack.get_items())
