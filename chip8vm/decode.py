"""CHIP-8 instruction decoding."""

import enum
from typing import Iterator, Sequence, Tuple, Union

from chex import dataclass

from chip8vm.constants import PROGRAM_START, WORD_MASK
from chip8vm.errors import UnknownOpcode


class OpKind(enum.Enum):
    """Every operation of the CHIP-8 instruction set."""
    SYS_ADDR = "0NNN"
    CLEAR = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQUAL = "3XNN"
    SKIP_NOT_EQUAL = "4XNN"
    SKIP_EQUAL_REGISTER = "5XY0"
    LOAD = "6XNN"
    ADD = "7XNN"
    LOAD_REGISTER = "8XY0"
    OR_REGISTER = "8XY1"
    AND_REGISTER = "8XY2"
    XOR_REGISTER = "8XY3"
    ADD_REGISTER = "8XY4"
    SUB_REGISTER = "8XY5"
    SHIFT_RIGHT_REGISTER = "8XY6"
    SUB_REVERSE_REGISTER = "8XY7"
    SHIFT_LEFT_REGISTER = "8XYE"
    SKIP_NOT_EQUAL_REGISTER = "9XY0"
    SET_INDEX_REGISTER = "ANNN"
    JUMP_WITH_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DRAW = "DXYN"
    SKIP_KEY_PRESSED = "EX9E"
    SKIP_KEY_NOT_PRESSED = "EXA1"
    LOAD_DELAY = "FX07"
    LOAD_NEXT_KEY_PRESS = "FX0A"
    SET_DELAY_TIMER = "FX15"
    SET_SOUND_TIMER = "FX18"
    ADD_INDEX_REGISTER = "FX1E"
    INDEX_AT_SPRITE = "FX29"
    BINARY_CODE_CONVERSION = "FX33"
    STORE_ALL_REGISTERS = "FX55"
    LOAD_ALL_REGISTERS = "FX65"


# 8XYN sub-opcodes, keyed by N
_ALU_OPS = {
    0x0: OpKind.LOAD_REGISTER,
    0x1: OpKind.OR_REGISTER,
    0x2: OpKind.AND_REGISTER,
    0x3: OpKind.XOR_REGISTER,
    0x4: OpKind.ADD_REGISTER,
    0x5: OpKind.SUB_REGISTER,
    0x6: OpKind.SHIFT_RIGHT_REGISTER,
    0x7: OpKind.SUB_REVERSE_REGISTER,
    0xE: OpKind.SHIFT_LEFT_REGISTER,
}

# FXNN sub-opcodes, keyed by NN
_MISC_OPS = {
    0x07: OpKind.LOAD_DELAY,
    0x0A: OpKind.LOAD_NEXT_KEY_PRESS,
    0x15: OpKind.SET_DELAY_TIMER,
    0x18: OpKind.SET_SOUND_TIMER,
    0x1E: OpKind.ADD_INDEX_REGISTER,
    0x29: OpKind.INDEX_AT_SPRITE,
    0x33: OpKind.BINARY_CODE_CONVERSION,
    0x55: OpKind.STORE_ALL_REGISTERS,
    0x65: OpKind.LOAD_ALL_REGISTERS,
}

# Opcode families with no sub-opcode, keyed by the first nibble
_FAMILY_OPS = {
    0x1: OpKind.JUMP,
    0x2: OpKind.CALL,
    0x3: OpKind.SKIP_EQUAL,
    0x4: OpKind.SKIP_NOT_EQUAL,
    0x6: OpKind.LOAD,
    0x7: OpKind.ADD,
    0xA: OpKind.SET_INDEX_REGISTER,
    0xB: OpKind.JUMP_WITH_OFFSET,
    0xC: OpKind.RANDOM,
    0xD: OpKind.DRAW,
}


@dataclass(frozen=True)
class Operation:
    """Decoded CHIP-8 instruction with extracted operands."""
    kind: OpKind
    raw: int
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)

    @property
    def opcode(self) -> int:
        """First nibble."""
        return (self.raw & 0xF000) >> 12

    @property
    def mnemonic(self) -> str:
        return _format(self)

    def __str__(self) -> str:
        return self.mnemonic


def _classify(word: int) -> OpKind:
    opcode = (word & 0xF000) >> 12
    n = word & 0x000F
    nn = word & 0x00FF

    if opcode == 0x0:
        if word == 0x00E0:
            return OpKind.CLEAR
        if word == 0x00EE:
            return OpKind.RETURN
        return OpKind.SYS_ADDR
    if opcode in _FAMILY_OPS:
        return _FAMILY_OPS[opcode]
    if opcode == 0x5 and n == 0x0:
        return OpKind.SKIP_EQUAL_REGISTER
    if opcode == 0x8 and n in _ALU_OPS:
        return _ALU_OPS[n]
    if opcode == 0x9 and n == 0x0:
        return OpKind.SKIP_NOT_EQUAL_REGISTER
    if opcode == 0xE and nn == 0x9E:
        return OpKind.SKIP_KEY_PRESSED
    if opcode == 0xE and nn == 0xA1:
        return OpKind.SKIP_KEY_NOT_PRESSED
    if opcode == 0xF and nn in _MISC_OPS:
        return _MISC_OPS[nn]
    raise UnknownOpcode(word)


def decode(instruction: int) -> Operation:
    """Decode 16-bit instruction into an operation and its operands.

    Raises:
        UnknownOpcode: if the word is not a valid 16-bit CHIP-8 instruction
    """
    instruction = int(instruction)
    if not 0 <= instruction <= WORD_MASK:
        raise UnknownOpcode(instruction)
    return Operation(
        kind=_classify(instruction),
        raw=instruction,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF,
    )


_TEMPLATES = {
    OpKind.SYS_ADDR: "SYS 0x{nnn:03X}",
    OpKind.CLEAR: "CLS",
    OpKind.RETURN: "RET",
    OpKind.JUMP: "JP 0x{nnn:03X}",
    OpKind.CALL: "CALL 0x{nnn:03X}",
    OpKind.SKIP_EQUAL: "SE V{x:X}, 0x{nn:02X}",
    OpKind.SKIP_NOT_EQUAL: "SNE V{x:X}, 0x{nn:02X}",
    OpKind.SKIP_EQUAL_REGISTER: "SE V{x:X}, V{y:X}",
    OpKind.LOAD: "LD V{x:X}, 0x{nn:02X}",
    OpKind.ADD: "ADD V{x:X}, 0x{nn:02X}",
    OpKind.LOAD_REGISTER: "LD V{x:X}, V{y:X}",
    OpKind.OR_REGISTER: "OR V{x:X}, V{y:X}",
    OpKind.AND_REGISTER: "AND V{x:X}, V{y:X}",
    OpKind.XOR_REGISTER: "XOR V{x:X}, V{y:X}",
    OpKind.ADD_REGISTER: "ADD V{x:X}, V{y:X}",
    OpKind.SUB_REGISTER: "SUB V{x:X}, V{y:X}",
    OpKind.SHIFT_RIGHT_REGISTER: "SHR V{x:X}, V{y:X}",
    OpKind.SUB_REVERSE_REGISTER: "SUBN V{x:X}, V{y:X}",
    OpKind.SHIFT_LEFT_REGISTER: "SHL V{x:X}, V{y:X}",
    OpKind.SKIP_NOT_EQUAL_REGISTER: "SNE V{x:X}, V{y:X}",
    OpKind.SET_INDEX_REGISTER: "LD I, 0x{nnn:03X}",
    OpKind.JUMP_WITH_OFFSET: "JP V0, 0x{nnn:03X}",
    OpKind.RANDOM: "RND V{x:X}, 0x{nn:02X}",
    OpKind.DRAW: "DRW V{x:X}, V{y:X}, {n}",
    OpKind.SKIP_KEY_PRESSED: "SKP V{x:X}",
    OpKind.SKIP_KEY_NOT_PRESSED: "SKNP V{x:X}",
    OpKind.LOAD_DELAY: "LD V{x:X}, DT",
    OpKind.LOAD_NEXT_KEY_PRESS: "LD V{x:X}, K",
    OpKind.SET_DELAY_TIMER: "LD DT, V{x:X}",
    OpKind.SET_SOUND_TIMER: "LD ST, V{x:X}",
    OpKind.ADD_INDEX_REGISTER: "ADD I, V{x:X}",
    OpKind.INDEX_AT_SPRITE: "LD F, V{x:X}",
    OpKind.BINARY_CODE_CONVERSION: "LD B, V{x:X}",
    OpKind.STORE_ALL_REGISTERS: "LD [I], V{x:X}",
    OpKind.LOAD_ALL_REGISTERS: "LD V{x:X}, [I]",
}


def _format(operation: Operation) -> str:
    return _TEMPLATES[operation.kind].format(
        x=operation.x, y=operation.y, n=operation.n, nn=operation.nn, nnn=operation.nnn
    )


def disassemble(instruction: int) -> str:
    """Assembly text for one instruction word; undecodable words become ``DW``."""
    try:
        return decode(instruction).mnemonic
    except UnknownOpcode:
        return f"DW 0x{int(instruction) & WORD_MASK:04X}"


def disassemble_rom(
    rom: Union[bytes, bytearray, Sequence[int]], origin: int = PROGRAM_START
) -> Iterator[Tuple[int, int, str]]:
    """Yield (address, word, text) for each 2-byte word of a ROM image.

    A trailing odd byte is padded with zero.
    """
    data = list(rom)
    if len(data) % 2:
        data.append(0)
    for offset in range(0, len(data), 2):
        word = (data[offset] << 8) | data[offset + 1]
        yield origin + offset, word, disassemble(word)
