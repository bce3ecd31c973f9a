"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

from chip8vm.state import EmulatorState
from chip8vm.decode import Operation, OpKind
from chip8vm.registers import get_register, set_register, set_flag

# Each ALU function maps (VX, VY) to (new VX, new VF); a VF of None leaves the flag alone.
AluResult = tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow occurred."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 0x1


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow occurred."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    OpKind.LOAD_REGISTER: alu_set,
    OpKind.OR_REGISTER: alu_or,
    OpKind.AND_REGISTER: alu_and,
    OpKind.XOR_REGISTER: alu_xor,
    OpKind.ADD_REGISTER: alu_add,
    OpKind.SUB_REGISTER: alu_sub_xy,
    OpKind.SHIFT_RIGHT_REGISTER: alu_shift_right,
    OpKind.SUB_REVERSE_REGISTER: alu_sub_yx,
    OpKind.SHIFT_LEFT_REGISTER: alu_shift_left,
}

_SHIFTS = (OpKind.SHIFT_RIGHT_REGISTER, OpKind.SHIFT_LEFT_REGISTER)
_LOGIC = (OpKind.OR_REGISTER, OpKind.AND_REGISTER, OpKind.XOR_REGISTER)


def execute_alu_operation(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """8XYN - ALU operations dispatcher.

    VF is written after VX, so when X is F the flag wins.
    """
    vx = get_register(state.V, instruction.x)
    vy = get_register(state.V, instruction.y)

    if instruction.kind in _SHIFTS and state.quirks.shift_uses_vy:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.kind](vx, vy)
    if vf is None and instruction.kind in _LOGIC and state.quirks.logic_resets_flag:
        vf = 0

    new_V = set_register(state.V, instruction.x, result)
    if vf is not None:
        new_V = set_flag(new_V, vf)
    return state.replace(V=new_V)
