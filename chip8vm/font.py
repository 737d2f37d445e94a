# Standard CHIP-8 fontset: sixteen 5-byte hex digit sprites, 0 through F.

from .config import FONT_START, GLYPH_SIZE
from .errors import InvalidDigitError

FONTSET = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)  # notice 80 bytes

FONT_END = FONT_START + len(FONTSET)


def character_address(digit):
    """Return the address of the glyph for hex digit `digit`."""
    if digit > 0xF:
        raise InvalidDigitError(digit)
    return FONT_START + GLYPH_SIZE * digit


def load_font(memory):
    """Write the fontset into `memory` starting at FONT_START."""
    memory[FONT_START:FONT_END] = FONTSET
