# CHIP-8 Virtual Machine
# CPU - 16 8-bit registers V0..VF, a 16-bit index register I, a program counter
#       starting at 0x200 and a 16-level call stack.
# Memory - 4096 bytes, fonts in the lowest 80, programs from 0x200.
# Output - 64x32 framebuffer (pixels are either on or off) & a sound timer that
#          switches a tone on and off.
# Input - a keypad read returning the pressed key 0x0..0xF, 0 meaning "no key".
#
# VF is both a general register and the flag output of ADD/SUB/SUBN/SHR/SHL/DRW;
# those instructions overwrite it as a side effect, see each handler for order.

import logging
import random

from .config import FLAG_REGISTER, PROGRAM_START, REGISTER_COUNT
from .decoder import decode, mnemonic
from .errors import UnsupportedOpcodeError
from .font import character_address
from .framebuffer import Framebuffer
from .memory import CallStack, Memory
from .timers import Timers

logger = logging.getLogger(__name__)


def no_key():
    return 0


class Chip8:
    """One CHIP-8 machine.

    :param image: optional memory image (at most 4096 bytes). The font is
        written over its first 80 bytes.
    :param clock: zero-argument monotonic clock in seconds, gates the 60 Hz timers
    :param rng: source of random bytes for RND, anything with ``getrandbits``
    :param keypad: zero-argument callable returning the pressed key, 0 for none
    :param audio: object with ``start()`` and ``stop()`` for the tone
    """

    def __init__(self, image=None, clock=None, rng=None, keypad=None, audio=None):
        # ---- CPU state ----
        self.ram = Memory(image)
        self.V = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = CallStack()
        self.timers = Timers(clock=clock, audio=audio)
        self.display = Framebuffer()

        self.rng = rng or random.Random()
        self.keypad = keypad or no_key

        self.draw_flag = False
        self.cycle_count = 0
        self.opcode_address = None

        self.setup_funcmap()

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            "CLS": self.op_CLS,
            "RET": self.op_RET,
            "JP": self.op_JP,
            "CALL": self.op_CALL,
            "SE_VX_NN": self.op_SE_Vx_nn,
            "SNE_VX_NN": self.op_SNE_Vx_nn,
            "SE_VX_VY": self.op_SE_Vx_Vy,
            "LD_VX_NN": self.op_LD_Vx_nn,
            "ADD_VX_NN": self.op_ADD_Vx_nn,
            "LD_VX_VY": self.op_LD_Vx_Vy,
            "OR": self.op_OR,
            "AND": self.op_AND,
            "XOR": self.op_XOR,
            "ADD": self.op_ADD,
            "SUB": self.op_SUB,
            "SHR": self.op_SHR,
            "SUBN": self.op_SUBN,
            "SHL": self.op_SHL,
            "SNE_VX_VY": self.op_SNE_Vx_Vy,
            "LD_I": self.op_LD_I,
            "JP_V0": self.op_JP_V0,
            "RND": self.op_RND,
            "DRW": self.op_DRW,
            "SKP": self.op_SKP,
            "SKNP": self.op_SKNP,
            "LD_VX_DT": self.op_LD_Vx_DT,
            "WAITKEY": self.op_WAITKEY,
            "LD_DT_VX": self.op_LD_DT_Vx,
            "LD_ST_VX": self.op_LD_ST_Vx,
            "ADD_I_VX": self.op_ADD_I_Vx,
            "FONT": self.op_FONT,
            "BCD": self.op_BCD,
            "STORE": self.op_STORE,
            "LOAD": self.op_LOAD,
        }

    # ---- Program ----
    def load_program(self, data, address=PROGRAM_START):
        self.ram.load_program(data, address)

    # ---- Cycle ----
    def cycle(self):
        """Fetch the word at PC, advance PC, run the 60 Hz timer gate, execute."""
        address = self.pc
        opcode = self.ram.read_word(address)
        self.pc += 2
        self.cycle_count += 1

        # timers count down before execution so Fx07 sees this cycle's start value
        self.timers.update()

        self.opcode_address = address
        try:
            self.execute(opcode)
        finally:
            self.opcode_address = None

    def step(self, count=1):
        for _ in range(count):
            self.cycle()

    def execute(self, opcode):
        """Decode and apply a single instruction word."""
        try:
            instruction = decode(opcode)
        except UnsupportedOpcodeError:
            raise UnsupportedOpcodeError(opcode, self.opcode_address) from None
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"{opcode:04X}: {mnemonic(instruction)}")
        self.funcmap[instruction.op](instruction)

    # ---- Opcode handlers ----

    # 00E0 - clear the display
    def op_CLS(self, ins):
        self.display.clear()
        self.draw_flag = True

    # 00EE - return from subroutine
    def op_RET(self, ins):
        self.pc = self.stack.pop(self.opcode_address)

    # 1nnn - jump to nnn
    def op_JP(self, ins):
        self.pc = ins.nnn

    # 2nnn - call subroutine at nnn
    def op_CALL(self, ins):
        self.stack.push(self.pc, target=ins.nnn)
        self.pc = ins.nnn

    # 3xnn - skip next instruction if Vx == nn
    def op_SE_Vx_nn(self, ins):
        if self.V[ins.x] == ins.nn:
            self.pc += 2

    # 4xnn - skip next instruction if Vx != nn
    def op_SNE_Vx_nn(self, ins):
        if self.V[ins.x] != ins.nn:
            self.pc += 2

    # 5xy0 - skip next instruction if Vx == Vy (low nibble is not checked)
    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self.pc += 2

    # 6xnn - Vx = nn
    def op_LD_Vx_nn(self, ins):
        self.V[ins.x] = ins.nn

    # 7xnn - Vx += nn, no carry flag
    def op_ADD_Vx_nn(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.nn) & 0xFF

    # 8xy0..8xyE
    def op_LD_Vx_Vy(self, ins):
        self.V[ins.x] = self.V[ins.y]

    def op_OR(self, ins):
        self.V[ins.x] |= self.V[ins.y]

    def op_AND(self, ins):
        self.V[ins.x] &= self.V[ins.y]

    def op_XOR(self, ins):
        self.V[ins.x] ^= self.V[ins.y]

    # the flag is written after Vx, so for x == F the flag is what remains
    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[FLAG_REGISTER] = 1 if total >> 8 else 0

    # VF = 1 when the difference does not fit in a byte, i.e. it went negative
    def op_SUB(self, ins):
        result = self.V[ins.x] - self.V[ins.y]
        self.V[ins.x] = result & 0xFF
        self.V[FLAG_REGISTER] = 1 if result >> 8 else 0

    def op_SUBN(self, ins):
        result = self.V[ins.y] - self.V[ins.x]
        self.V[ins.x] = result & 0xFF
        self.V[FLAG_REGISTER] = 1 if result >> 8 else 0

    # shifts read Vy and write VF first, then Vx
    def op_SHR(self, ins):
        self.V[FLAG_REGISTER] = self.V[ins.y] & 0x1
        self.V[ins.x] = self.V[ins.y] >> 1

    def op_SHL(self, ins):
        self.V[FLAG_REGISTER] = (self.V[ins.y] >> 7) & 0x1
        self.V[ins.x] = (self.V[ins.y] << 1) & 0xFF

    # 9xy0 - skip next instruction if Vx != Vy
    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self.pc += 2

    # Annn - I = nnn
    def op_LD_I(self, ins):
        self.I = ins.nnn

    # Bnnn - jump to nnn + V0
    def op_JP_V0(self, ins):
        self.pc = ins.nnn + self.V[0]

    # Cxnn - Vx = random byte & nn
    def op_RND(self, ins):
        self.V[ins.x] = self.rng.getrandbits(8) & ins.nn

    # Dxyn - draw n rows of sprite data from I at (Vx, Vy), VF = collision
    def op_DRW(self, ins):
        rows = self.ram.read_block(self.I, ins.n)
        collision = self.display.blit(self.V[ins.x], self.V[ins.y], rows)
        self.V[FLAG_REGISTER] = 1 if collision else 0
        self.draw_flag = True

    # Ex9E - skip if the key being read equals Vx
    def op_SKP(self, ins):
        if self.V[ins.x] == self.keypad():
            self.pc += 2

    # ExA1 - skip if the key being read does not equal Vx
    def op_SKNP(self, ins):
        if self.V[ins.x] != self.keypad():
            self.pc += 2

    # Fx07 - Vx = delay timer
    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.timers.delay

    # Fx0A - wait for a key: rewind PC and run this instruction again next cycle
    def op_WAITKEY(self, ins):
        key = self.keypad()
        if key == 0:
            self.pc -= 2
        else:
            self.V[ins.x] = key & 0xF

    # Fx15 - delay timer = Vx
    def op_LD_DT_Vx(self, ins):
        self.timers.delay = self.V[ins.x]

    # Fx18 - sound timer = Vx
    def op_LD_ST_Vx(self, ins):
        self.timers.sound = self.V[ins.x]

    # Fx1E - I += Vx, unchecked until I is used as an address
    def op_ADD_I_Vx(self, ins):
        self.I = (self.I + self.V[ins.x]) & 0xFFFF

    # Fx29 - I = address of the font glyph for digit Vx
    def op_FONT(self, ins):
        self.I = character_address(self.V[ins.x])

    # Fx33 - hundreds, tens and units of Vx at I, I+1, I+2
    def op_BCD(self, ins):
        value = self.V[ins.x]
        self.ram.write_block(self.I, [value // 100, (value % 100) // 10, value % 10])

    # Fx55 - store V0..Vx from I, I advances past them
    def op_STORE(self, ins):
        for i in range(ins.x + 1):
            self.ram.write(self.I, self.V[i])
            self.I += 1

    # Fx65 - load V0..Vx from I, I advances past them
    def op_LOAD(self, ins):
        for i in range(ins.x + 1):
            self.V[i] = self.ram.read(self.I)
            self.I += 1

    # ---- Read accessors ----
    @property
    def index(self):
        return self.I

    def register(self, n):
        return self.V[n] & 0xFF

    @property
    def registers(self):
        return tuple(v & 0xFF for v in self.V)

    @property
    def delay_timer(self):
        return self.timers.delay

    @property
    def sound_timer(self):
        return self.timers.sound

    @property
    def stack_pointer(self):
        return self.stack.sp

    @property
    def call_stack(self):
        return self.stack.snapshot()

    @property
    def screen(self):
        """Copy of the framebuffer, 32 rows of 64 pixels (0 or 1)."""
        return self.display.snapshot()

    @property
    def memory(self):
        """Copy of all 4096 bytes of memory."""
        return self.ram.snapshot()

    def consume_draw_flag(self):
        """Return whether the screen changed since the last call, and reset."""
        changed = self.draw_flag
        self.draw_flag = False
        return changed
