"""CHIP-8 control flow instructions."""

import jax.numpy as jnp

from chip8vm.constants import WORD_MASK
from chip8vm.state import EmulatorState
from chip8vm.decode import Operation
from chip8vm.keypad import is_pressed
from chip8vm.quirks import JumpOffset
from chip8vm.registers import get_register
from chip8vm.stack import push


def _advance(state: EmulatorState, amount: int = 2) -> EmulatorState:
    return state.replace(pc=jnp.uint16((int(state.pc) + amount) & WORD_MASK))


def execute_jump(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.uint16(instruction.nnn))


def execute_call(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: Operation) -> EmulatorState:
        if condition_fn(state, instruction):
            return _advance(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state.V, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state.V, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state.V, inst.x) == get_register(state.V, inst.y)
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state.V, inst.x) != get_register(state.V, inst.y)
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: is_pressed(state.keypad, get_register(state.V, inst.x))
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not is_pressed(state.keypad, get_register(state.V, inst.x))
)


def execute_jump_with_offset(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """BNNN - Jump to NNN + V0, or BXNN - jump to XNN + VX depending on quirks.

    The target is not wrapped; a target beyond memory fails on the next fetch.
    """
    if state.quirks.jump_offset is JumpOffset.VX:
        offset = get_register(state.V, instruction.x)
    else:
        offset = get_register(state.V, 0)
    return state.replace(pc=jnp.uint16(instruction.nnn + offset))
