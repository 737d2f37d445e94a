"""
Font table, memory and call stack tests.
"""

import pytest

from chip8vm import Chip8, FONTSET, character_address
from chip8vm.errors import (
    InvalidDigitError,
    InvalidMemoryImageError,
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
)
from chip8vm.memory import CallStack, Memory


class TestFont:

    def test_character_address_every_digit(self):
        """Glyph for digit d lives at 5*d."""
        for d in range(16):
            assert character_address(d) == 5 * d

    def test_character_address_rejects_16(self):
        with pytest.raises(InvalidDigitError) as exc:
            character_address(16)
        assert exc.value.digit == 16

    def test_font_loaded_at_zero(self):
        vm = Chip8()
        assert vm.memory[:80] == bytes(FONTSET)
        # glyph "0" is a box
        assert vm.memory[0:5] == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
        # glyph "F"
        assert vm.memory[75:80] == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])


class TestMemoryConstruction:

    def test_empty_machine_is_font_only(self):
        vm = Chip8()
        mem = vm.memory
        assert len(mem) == 4096
        assert mem[80:] == bytes(4096 - 80)
        assert vm.pc == 0x200

    def test_image_overwritten_below_80(self):
        """Caller image low bytes lose to the font."""
        image = bytes([0xAA] * 0x210)
        vm = Chip8(image)
        mem = vm.memory
        assert mem[:80] == bytes(FONTSET)
        assert mem[80] == 0xAA
        assert mem[0x20F] == 0xAA
        assert mem[0x210] == 0

    def test_image_exactly_4096_accepted(self):
        vm = Chip8(bytes(4096))
        assert len(vm.memory) == 4096

    def test_image_too_large(self):
        with pytest.raises(InvalidMemoryImageError) as exc:
            Chip8(bytes(4097))
        assert exc.value.size == 4097
        assert isinstance(exc.value, ValueError)

    def test_memory_accessor_is_a_copy(self):
        vm = Chip8()
        snap = vm.memory
        vm.ram.write(0x300, 0x42)
        assert snap[0x300] == 0
        assert vm.memory[0x300] == 0x42


class TestMemoryAccess:

    def test_read_word_big_endian(self):
        mem = Memory()
        mem.write_block(0x200, [0x12, 0x34])
        assert mem.read_word(0x200) == 0x1234

    def test_read_out_of_range(self):
        mem = Memory()
        with pytest.raises(MemoryAccessError) as exc:
            mem.read(4096)
        assert exc.value.address == 4096

    def test_block_straddling_end(self):
        mem = Memory()
        with pytest.raises(MemoryAccessError):
            mem.write_block(4094, [1, 2, 3])

    def test_word_at_last_byte(self):
        mem = Memory()
        with pytest.raises(MemoryAccessError):
            mem.read_word(4095)

    def test_load_program(self):
        vm = Chip8()
        vm.load_program(b"\x60\x05\x70\x01")
        assert vm.memory[0x200:0x204] == b"\x60\x05\x70\x01"

    def test_load_program_too_large(self):
        vm = Chip8()
        with pytest.raises(ProgramTooLargeError):
            vm.load_program(bytes(4096 - 0x200 + 1))


class TestCallStack:

    def test_push_pop(self):
        stack = CallStack()
        stack.push(0x202)
        stack.push(0x304)
        assert stack.sp == 2
        assert stack.snapshot() == (0x202, 0x304)
        assert stack.pop() == 0x304
        assert stack.pop() == 0x202
        assert stack.sp == 0

    def test_overflow_on_seventeenth_push(self):
        stack = CallStack()
        for i in range(16):
            stack.push(0x200 + 2 * i)
        with pytest.raises(StackOverflowError):
            stack.push(0x400)
        assert stack.sp == 16

    def test_underflow(self):
        with pytest.raises(StackUnderflowError):
            CallStack().pop()
