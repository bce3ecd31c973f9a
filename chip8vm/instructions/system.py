"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp

from chip8vm.state import EmulatorState
from chip8vm.decode import Operation
from chip8vm.display import clear
from chip8vm.stack import pop


def no_op(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """0NNN - Machine code routine; not supported by interpreters, ignored."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.uint16(address))
