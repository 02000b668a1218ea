#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8, with optional Super-CHIP display modes)

Like a real computer, this is where most of the processing happens.  Each call
to step() fetches one big-endian opcode at the program counter, looks up its
handler, and executes it.  The CPU has no idea how fast it is running: the host
scheduler decides how often to call step(), and drives the timers separately.

Opcode handlers are looked up by the first nibble, then (for families sharing
a first nibble) by the opcode masked down to the bits that identify it.
Unknown opcodes raise InvalidOpcode.  Nothing is skipped silently.

Fx0A (wait for a keypress) does not block.  It puts the CPU into the
'awaiting key' state and leaves the program counter on the Fx0A.  Following
steps do nothing until the keypad reports a new press, so timers, input and
rendering all carry on in the meantime.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import APP_INTRO, FONT_ADDRESS, FONT_GLYPH_SIZE, PROGRAM_START, PC_MAX, LO_RES_SIZE, HI_RES_SIZE
from .errors import CPUError, InvalidOpcode, MemoryOutOfBounds  # noqa: F401
from .quirks import Quirks

STATE_RUNNING = "running"
STATE_AWAITING_KEY = "awaiting key"


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, timers, debugger, quirks=None, allow_hires=False, rng=None):
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.quirks = Quirks() if quirks is None else quirks
        self.allow_hires = allow_hires
        self.rng = Random() if rng is None else rng

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        if allow_hires:
            # Super-CHIP display mode switches
            self.instructions.update(
                {
                    0x00FE: self._00FE,
                    0x00FF: self._00FF
                }
            )

        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.reset()

    def reset(self, start_location=PROGRAM_START):
        self.v[:] = bytes(16)
        self.i = 0  # Index register (16-bit)
        self.pc = start_location
        self.debug_pc = start_location
        self.next_pc = start_location
        self.opcode = 0
        self.state = STATE_RUNNING
        self.key_register = 0  # Register receiving the key when an Fx0A wait completes
        self.ops_executed = 0
        self.lo_res = True
        self.framebuffer.resize_vid(*LO_RES_SIZE)  # Also blanks the screen

    def step(self):
        if self.state == STATE_AWAITING_KEY:
            self._resolve_keypress()
            return

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc  # Do this all the time in case there is a crash
        self.opcode = self.fetch()
        self.next_pc = self.pc + 2  # Handlers may replace this with a jump or skip target
        self.decode_exec()
        self.pc = self._check_pc(self.next_pc)
        self.ops_executed += 1

    def fetch(self):
        return self.ram.read16(self.pc)

    def is_awaiting_key(self):
        return self.state == STATE_AWAITING_KEY

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def _check_pc(self, location):
        if location & 1 or location < 0 or location > PC_MAX:
            raise MemoryOutOfBounds(
                "Program counter target 0x{:04x} (from 0x{:03x}) is not an even address within memory".format(
                    location, self.debug_pc
                )
            )

        return location

    def _jump(self, location):
        self.next_pc = self._check_pc(location)

    def _skip(self):
        self.next_pc += 2

    def _resolve_keypress(self):
        key = self.keypad.get_keypress()

        if key is None:
            # Still waiting.  The instruction clock is frozen, but timers carry on
            return

        next_pc = self._check_pc(self.pc + 2)
        self.v[self.key_register] = key
        self.state = STATE_RUNNING
        self.pc = next_pc
        self.ops_executed += 1

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise InvalidOpcode(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not a valid instruction."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), self.opcode, self.debug_pc
            )
        ) from None

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _0nnn(self):
        opcode = self.opcode

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing, and aren't instructions
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self._jump(self.stack.peek())  # Validate before popping, so a bad return leaves the stack intact
        self.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self._jump(self.addr)

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        self._check_pc(self.addr)
        self.stack.push(self.next_pc)
        self.next_pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] == self.byte:
            self._skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] != self.byte:
            self._skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] == self.v[self.vy]:
            self._skip()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        # No carry flag for this one
        byte += self.v[vx]
        self.v[vx] = byte & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.quirks.logic:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying, after Vx in case Vx is Vf

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _debug_8xy6_8xyE(self, direction):
        self.debug(
            "{} V{:01x}".format(direction, self.vx) if self.quirks.shift else
            "{} V{:01x}, V{:01x}".format(direction, self.vx, self.vy)
        )

    def _post_8xy6_8xyE(self, val, flag):
        if self.quirks.shift_flag:
            self.v[0xF] = flag
            self.v[self.vx] = val
        else:
            self.v[self.vx] = val
            self.v[0xF] = flag

    def _8xy6(self):  # SHR Vx {, Vy}
        if self.live_debug:
            self._debug_8xy6_8xyE("SHR")

        val = self.v[self.vx if self.quirks.shift else self.vy]
        self._post_8xy6_8xyE(val >> 1, val & 1)  # The result is put in Vx either way

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx {, Vy}
        if self.live_debug:
            self._debug_8xy6_8xyE("SHL")

        val = self.v[self.vx if self.quirks.shift else self.vy]
        self._post_8xy6_8xyE((val << 1) & 0xFF, val >> 7)

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] != self.v[self.vy]:
            self._skip()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # This is a nasty quirk which breaks lots of games if set incorrectly.  It varies depending on the ROM.
        vr = self.vx if self.quirks.jump else 0

        if self.live_debug:
            self.debug("JP V{:01x}, 0x{:03x}".format(vr, self.addr))

        self._jump(self.v[vr] + self.addr)

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = self.rng.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Main sprite drawing routine.  If nibble == 0 and Super-CHIP display modes are on, draw a big sprite
        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        if height == 0 and self.allow_hires:
            # Super-CHIP sprite.  Show 8x16 if low res, otherwise 16x16
            height = 16
            width = 8 if self.lo_res else 16
        else:
            width = 8

        big_sprite = width > 8
        i = self.i
        self.ram.check_range(i, height * 2 if big_sprite else height)

        # The sprite's start always wraps.  The rest of it wraps too, unless clipping.
        vid_width, vid_height = self.framebuffer.get_vid_size()
        vx_pos = self.v[self.vx] % vid_width
        vy_pos = self.v[self.vy] % vid_height
        wrap = not self.quirks.clip
        collided = False

        for y in range(height):
            spr_data = (
                (self.ram.read(i + y * 2) << 8) | self.ram.read(i + y * 2 + 1)
            ) if big_sprite else self.ram.read(i + y)
            scr_y = y + vy_pos

            for x in range(width):
                pixel = (spr_data & (0x8000 >> x)) if big_sprite else (spr_data & (0x80 >> x))

                if pixel and self.framebuffer.xor_pixel(x + vx_pos, scr_y, wrap):
                    # Don't stop drawing.  Set the flag once any lit pixel is erased
                    collided = True

        self.v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        if self.keypad.is_key_down(self.v[self.vx]):
            self._skip()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        if not self.keypad.is_key_down(self.v[self.vx]):
            self._skip()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.timers.dt

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # Forget any earlier presses, so only a fresh one completes the wait.  Stay on this instruction; the program
        # counter moves on once a key arrives.
        self.keypad.setup_keypress()
        self.key_register = self.vx
        self.state = STATE_AWAITING_KEY
        self.next_pc = self.pc

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.timers.set_delay(self.v[self.vx])

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        self.timers.set_sound(self.v[self.vx])

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        val = self.i + self.v[self.vx]
        self.i = val & 0xFFFF

        # Allow for Amiga CHIP-8 interpreter behaviour
        if self.quirks.index_overflow:
            self.v[0xF] = int(val > 0xFFF)

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        self.i = FONT_ADDRESS + FONT_GLYPH_SIZE * (self.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self):
        if self.quirks.load:
            self.i += self.vx

            if not self.quirks.index_increment:
                self.i += 1

            self.i &= 0xFFFF

    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        # Ensure with +1s that the final register is copied
        self.ram.write_block(self.i, self.v[:self.vx + 1])
        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
        self._post_Fx55_Fx65()

    # Super-CHIP display modes (only when enabled)

    def _00FE(self):  # LOW
        if self.live_debug:
            self.debug("LOW")

        if not self.lo_res:
            self.framebuffer.resize_vid(*LO_RES_SIZE)
            self.lo_res = True

    def _00FF(self):  # HIGH
        if self.live_debug:
            self.debug("HIGH")

        if self.lo_res:
            self.framebuffer.resize_vid(*HI_RES_SIZE)
            self.lo_res = False
