"""Tests for instruction decoding and disassembly."""

import pytest
from chip8vm import decode, disassemble, disassemble_rom, OpKind, UnknownOpcode


class TestDecode:
    """Test word-to-operation mapping."""

    @pytest.mark.parametrize("word, kind", [
        (0x0000, OpKind.SYS_ADDR),
        (0x0123, OpKind.SYS_ADDR),
        (0x00E0, OpKind.CLEAR),
        (0x00EE, OpKind.RETURN),
        (0x1234, OpKind.JUMP),
        (0x2345, OpKind.CALL),
        (0x3A42, OpKind.SKIP_EQUAL),
        (0x4A42, OpKind.SKIP_NOT_EQUAL),
        (0x5AB0, OpKind.SKIP_EQUAL_REGISTER),
        (0x6A3C, OpKind.LOAD),
        (0x7A01, OpKind.ADD),
        (0x8AB0, OpKind.LOAD_REGISTER),
        (0x8AB1, OpKind.OR_REGISTER),
        (0x8AB2, OpKind.AND_REGISTER),
        (0x8AB3, OpKind.XOR_REGISTER),
        (0x8AB4, OpKind.ADD_REGISTER),
        (0x8AB5, OpKind.SUB_REGISTER),
        (0x8AB6, OpKind.SHIFT_RIGHT_REGISTER),
        (0x8AB7, OpKind.SUB_REVERSE_REGISTER),
        (0x8ABE, OpKind.SHIFT_LEFT_REGISTER),
        (0x9AB0, OpKind.SKIP_NOT_EQUAL_REGISTER),
        (0xA123, OpKind.SET_INDEX_REGISTER),
        (0xB123, OpKind.JUMP_WITH_OFFSET),
        (0xCAFF, OpKind.RANDOM),
        (0xDAB5, OpKind.DRAW),
        (0xEA9E, OpKind.SKIP_KEY_PRESSED),
        (0xEAA1, OpKind.SKIP_KEY_NOT_PRESSED),
        (0xFA07, OpKind.LOAD_DELAY),
        (0xFA0A, OpKind.LOAD_NEXT_KEY_PRESS),
        (0xFA15, OpKind.SET_DELAY_TIMER),
        (0xFA18, OpKind.SET_SOUND_TIMER),
        (0xFA1E, OpKind.ADD_INDEX_REGISTER),
        (0xFA29, OpKind.INDEX_AT_SPRITE),
        (0xFA33, OpKind.BINARY_CODE_CONVERSION),
        (0xFA55, OpKind.STORE_ALL_REGISTERS),
        (0xFA65, OpKind.LOAD_ALL_REGISTERS),
    ])
    def test_known_opcodes(self, word, kind):
        assert decode(word).kind is kind

    def test_every_kind_is_reachable(self):
        """Every operation kind is produced by some word."""
        kinds = set()
        for word in range(0x10000):
            try:
                kinds.add(decode(word).kind)
            except UnknownOpcode:
                pass
        assert kinds == set(OpKind)

    def test_operand_fields(self):
        op = decode(0xD12F)
        assert op.raw == 0xD12F
        assert op.opcode == 0xD
        assert op.x == 0x1
        assert op.y == 0x2
        assert op.n == 0xF
        assert op.nn == 0x2F
        assert op.nnn == 0x12F

    @pytest.mark.parametrize("word", [0x5AB1, 0x8AB8, 0x8ABF, 0x9AB1, 0xE0FF, 0xF0FF, 0xF000])
    def test_unknown_opcodes(self, word):
        with pytest.raises(UnknownOpcode) as excinfo:
            decode(word)
        assert excinfo.value.word == word

    @pytest.mark.parametrize("word", [-1, 0x10000])
    def test_out_of_range_word(self, word):
        with pytest.raises(UnknownOpcode):
            decode(word)


class TestDisassemble:
    """Test mnemonic rendering."""

    @pytest.mark.parametrize("word, text", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x6A3C, "LD VA, 0x3C"),
        (0x8124, "ADD V1, V2"),
        (0xA2F0, "LD I, 0x2F0"),
        (0xD015, "DRW V0, V1, 5"),
        (0xF329, "LD F, V3"),
        (0xF265, "LD V2, [I]"),
    ])
    def test_mnemonics(self, word, text):
        assert disassemble(word) == text
        assert str(decode(word)) == text

    def test_unknown_word_is_data(self):
        assert disassemble(0xF0FF) == "DW 0xF0FF"

    def test_disassemble_rom(self):
        rows = list(disassemble_rom(bytes([0x00, 0xE0, 0x6A, 0x3C, 0x12])))
        assert rows == [
            (0x200, 0x00E0, "CLS"),
            (0x202, 0x6A3C, "LD VA, 0x3C"),
            (0x204, 0x1200, "JP 0x200"),
        ]
