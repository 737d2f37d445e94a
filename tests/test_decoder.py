"""
Decoder tests: operand fields and the unsupported-opcode default.
"""

import pytest

from chip8vm import decode, disassemble
from chip8vm.errors import UnsupportedOpcodeError


class TestDecode:

    def test_fields(self):
        ins = decode(0xD123)
        assert ins.op == "DRW"
        assert (ins.x, ins.y, ins.n) == (0x1, 0x2, 0x3)
        assert ins.nn == 0x23
        assert ins.nnn == 0x123
        assert ins.word == 0xD123

    def test_families(self):
        cases = {
            0x00E0: "CLS", 0x00EE: "RET",
            0x1ABC: "JP", 0x2ABC: "CALL",
            0x3A05: "SE_VX_NN", 0x4A05: "SNE_VX_NN",
            0x5AB0: "SE_VX_VY", 0x9AB0: "SNE_VX_VY",
            0x6A12: "LD_VX_NN", 0x7A05: "ADD_VX_NN",
            0x8AB0: "LD_VX_VY", 0x8AB1: "OR", 0x8AB2: "AND", 0x8AB3: "XOR",
            0x8AB4: "ADD", 0x8AB5: "SUB", 0x8AB6: "SHR", 0x8AB7: "SUBN", 0x8ABE: "SHL",
            0xA123: "LD_I", 0xB123: "JP_V0", 0xC1FF: "RND",
            0xE19E: "SKP", 0xE1A1: "SKNP",
            0xF107: "LD_VX_DT", 0xF10A: "WAITKEY", 0xF115: "LD_DT_VX",
            0xF118: "LD_ST_VX", 0xF11E: "ADD_I_VX", 0xF129: "FONT",
            0xF133: "BCD", 0xF155: "STORE", 0xF165: "LOAD",
        }
        for word, op in cases.items():
            assert decode(word).op == op, hex(word)

    def test_skip_register_forms_ignore_low_nibble(self):
        assert decode(0x5AB7).op == "SE_VX_VY"
        assert decode(0x9AB3).op == "SNE_VX_VY"

    @pytest.mark.parametrize("word", [0x0000, 0x0123, 0x00E1, 0x8AB8, 0x8ABF, 0xE19F, 0xF100, 0xF1FF])
    def test_unsupported(self, word):
        with pytest.raises(UnsupportedOpcodeError) as exc:
            decode(word)
        assert exc.value.opcode == word

    def test_disassemble(self):
        assert disassemble(0x00E0) == "CLS"
        assert disassemble(0x6A12) == "LD VA, 0x12"
        assert disassemble(0xD015) == "DRW V0, V1, 5"
        assert disassemble(0x2300) == "CALL 0x300"
        assert disassemble(0xF065) == "LD V0, [I]"
        assert disassemble(0x0123) == "DW 0x0123"
