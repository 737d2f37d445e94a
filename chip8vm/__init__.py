"""CHIP-8 virtual machine core."""

import logging

from .config import LOGS_ON
from .decoder import Instruction, decode, disassemble
from .errors import (
    Chip8Error,
    InvalidDigitError,
    InvalidMemoryImageError,
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
    UnsupportedOpcodeError,
)
from .font import FONTSET, character_address
from .framebuffer import Framebuffer
from .timers import NullAudio, Timers
from .vm import Chip8

__version__ = "0.1.0"

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def set_logging(enabled):
    """Turn the package's debug logs on or off."""
    logger.setLevel(logging.DEBUG if enabled else logging.WARNING)


set_logging(LOGS_ON)
