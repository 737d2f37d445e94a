"""Fatal conditions raised by the CHIP-8 core.

Every error aborts the instruction (or construction) that produced it.
Nothing here is recoverable from inside the VM; the caller decides
whether to halt, report, or reset.
"""


class Chip8Error(Exception):
    """Base class for every fatal VM condition."""


class InvalidMemoryImageError(Chip8Error, ValueError):
    def __init__(self, size, capacity):
        super().__init__(f"Memory may not be greater than {capacity} bytes (got {size})")
        self.size = size
        self.capacity = capacity


class ProgramTooLargeError(Chip8Error, ValueError):
    def __init__(self, size, address, capacity):
        super().__init__(
            f"Program of {size} bytes does not fit at 0x{address:03X} in {capacity} bytes of memory"
        )
        self.size = size
        self.address = address


class InvalidDigitError(Chip8Error, ValueError):
    def __init__(self, digit):
        super().__init__(f"{digit} is not a valid character")
        self.digit = digit


class UnsupportedOpcodeError(Chip8Error):
    def __init__(self, opcode, address=None):
        where = "" if address is None else f" at 0x{address:03X}"
        super().__init__(f"Unsupported opcode: {opcode:04X}{where}")
        self.opcode = opcode
        self.address = address


class StackOverflowError(Chip8Error):
    def __init__(self, address, depth):
        super().__init__(f"Stack overflow on CALL to 0x{address:03X} (depth {depth})")
        self.address = address
        self.depth = depth


class StackUnderflowError(Chip8Error):
    def __init__(self, address=None):
        where = "" if address is None else f" at 0x{address:03X}"
        super().__init__(f"Stack underflow on RET{where}")
        self.address = address


class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, address, capacity):
        super().__init__(f"Memory access out of bounds: 0x{address:X} (capacity {capacity})")
        self.address = address
        self.capacity = capacity
