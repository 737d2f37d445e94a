"""Instruction decoding.

`decode` turns a 16-bit word into an `Instruction`: the operation name plus
every operand field already split out of the word. Matching is done against
a (mask, pattern) table scanned in order, so exact words come before the
families that would otherwise shadow them. A word that matches nothing
raises UnsupportedOpcodeError.
"""

from collections import namedtuple
from functools import lru_cache

from .errors import UnsupportedOpcodeError

Instruction = namedtuple("Instruction", "op word x y n nn nnn")

# (mask, pattern, op, mnemonic)
OPCODES = [
    (0xFFFF, 0x00E0, "CLS", "CLS"),
    (0xFFFF, 0x00EE, "RET", "RET"),

    (0xF000, 0x1000, "JP", "JP 0x{nnn:03X}"),
    (0xF000, 0x2000, "CALL", "CALL 0x{nnn:03X}"),
    (0xF000, 0x3000, "SE_VX_NN", "SE V{x:X}, 0x{nn:02X}"),
    (0xF000, 0x4000, "SNE_VX_NN", "SNE V{x:X}, 0x{nn:02X}"),
    (0xF000, 0x5000, "SE_VX_VY", "SE V{x:X}, V{y:X}"),
    (0xF000, 0x6000, "LD_VX_NN", "LD V{x:X}, 0x{nn:02X}"),
    (0xF000, 0x7000, "ADD_VX_NN", "ADD V{x:X}, 0x{nn:02X}"),

    (0xF00F, 0x8000, "LD_VX_VY", "LD V{x:X}, V{y:X}"),
    (0xF00F, 0x8001, "OR", "OR V{x:X}, V{y:X}"),
    (0xF00F, 0x8002, "AND", "AND V{x:X}, V{y:X}"),
    (0xF00F, 0x8003, "XOR", "XOR V{x:X}, V{y:X}"),
    (0xF00F, 0x8004, "ADD", "ADD V{x:X}, V{y:X}"),
    (0xF00F, 0x8005, "SUB", "SUB V{x:X}, V{y:X}"),
    (0xF00F, 0x8006, "SHR", "SHR V{x:X}, V{y:X}"),
    (0xF00F, 0x8007, "SUBN", "SUBN V{x:X}, V{y:X}"),
    (0xF00F, 0x800E, "SHL", "SHL V{x:X}, V{y:X}"),

    (0xF000, 0x9000, "SNE_VX_VY", "SNE V{x:X}, V{y:X}"),
    (0xF000, 0xA000, "LD_I", "LD I, 0x{nnn:03X}"),
    (0xF000, 0xB000, "JP_V0", "JP V0, 0x{nnn:03X}"),
    (0xF000, 0xC000, "RND", "RND V{x:X}, 0x{nn:02X}"),
    (0xF000, 0xD000, "DRW", "DRW V{x:X}, V{y:X}, {n}"),

    (0xF0FF, 0xE09E, "SKP", "SKP V{x:X}"),
    (0xF0FF, 0xE0A1, "SKNP", "SKNP V{x:X}"),

    (0xF0FF, 0xF007, "LD_VX_DT", "LD V{x:X}, DT"),
    (0xF0FF, 0xF00A, "WAITKEY", "LD V{x:X}, K"),
    (0xF0FF, 0xF015, "LD_DT_VX", "LD DT, V{x:X}"),
    (0xF0FF, 0xF018, "LD_ST_VX", "LD ST, V{x:X}"),
    (0xF0FF, 0xF01E, "ADD_I_VX", "ADD I, V{x:X}"),
    (0xF0FF, 0xF029, "FONT", "LD F, V{x:X}"),
    (0xF0FF, 0xF033, "BCD", "LD B, V{x:X}"),
    (0xF0FF, 0xF055, "STORE", "LD [I], V{x:X}"),
    (0xF0FF, 0xF065, "LOAD", "LD V{x:X}, [I]"),
]

MNEMONICS = {op: fmt for _, _, op, fmt in OPCODES}


@lru_cache(maxsize=None)
def decode(word):
    word &= 0xFFFF
    for mask, pattern, op, _ in OPCODES:
        if word & mask == pattern:
            return Instruction(
                op=op,
                word=word,
                x=(word >> 8) & 0xF,
                y=(word >> 4) & 0xF,
                n=word & 0xF,
                nn=word & 0xFF,
                nnn=word & 0x0FFF,
            )
    raise UnsupportedOpcodeError(word)


def mnemonic(instruction):
    return MNEMONICS[instruction.op].format(**instruction._asdict())


def disassemble(word):
    """Render a word as assembly text, or `DW 0xNNNN` if it does not decode."""
    try:
        return mnemonic(decode(word))
    except UnsupportedOpcodeError:
        return f"DW 0x{word & 0xFFFF:04X}"
