"""Flat byte memory and the subroutine call stack.

Memory is a fixed 4096-byte numpy array with the fontset in the lowest
80 bytes. Every access is bounds-checked: an address outside the array
raises MemoryAccessError instead of wrapping.
"""

import logging

import numpy as np

from .config import MEMORY_SIZE, PROGRAM_START, STACK_DEPTH
from .errors import (
    InvalidMemoryImageError,
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
)
from .font import load_font

logger = logging.getLogger(__name__)


class Memory:

    def __init__(self, image=None):
        self.cells = np.zeros(MEMORY_SIZE, dtype=np.uint8)
        if image is not None:
            if len(image) > MEMORY_SIZE:
                raise InvalidMemoryImageError(len(image), MEMORY_SIZE)
            self.cells[:len(image)] = np.frombuffer(bytes(image), dtype=np.uint8)
        # the font always wins over whatever the image had in low memory
        load_font(self.cells)

    def __len__(self):
        return MEMORY_SIZE

    def _check(self, address, count=1):
        if address < 0 or address + count > MEMORY_SIZE:
            raise MemoryAccessError(address if address < 0 else address + count - 1, MEMORY_SIZE)

    def read(self, address):
        self._check(address)
        return int(self.cells[address])

    def write(self, address, value):
        self._check(address)
        self.cells[address] = value & 0xFF

    def read_block(self, address, count):
        self._check(address, count)
        return [int(b) for b in self.cells[address:address + count]]

    def write_block(self, address, values):
        values = [v & 0xFF for v in values]
        self._check(address, len(values))
        self.cells[address:address + len(values)] = values

    def read_word(self, address):
        """Big-endian 16-bit read: high byte at `address`."""
        self._check(address, 2)
        return (int(self.cells[address]) << 8) | int(self.cells[address + 1])

    def load_program(self, data, address=PROGRAM_START):
        if address < 0 or address + len(data) > MEMORY_SIZE:
            raise ProgramTooLargeError(len(data), address, MEMORY_SIZE)
        logger.debug(f"Loading {len(data)} program bytes at 0x{address:03X}")
        self.cells[address:address + len(data)] = np.frombuffer(bytes(data), dtype=np.uint8)

    def snapshot(self):
        """Defensive copy of the whole memory as bytes."""
        return self.cells.tobytes()


class CallStack:
    """16-level return address stack.

    push stores at stack[sp] then increments sp; pop decrements then loads.
    Going past either end is fatal.
    """

    def __init__(self, depth=STACK_DEPTH):
        self.slots = np.zeros(depth, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    def push(self, address, target=None):
        if self.sp >= len(self.slots):
            raise StackOverflowError(target if target is not None else address, self.sp)
        self.slots[self.sp] = address
        self.sp += 1

    def pop(self, address=None):
        if self.sp == 0:
            raise StackUnderflowError(address)
        self.sp -= 1
        return int(self.slots[self.sp])

    def snapshot(self):
        return tuple(int(a) for a in self.slots[:self.sp])
