"""CHIP-8 register and index loads (6XNN, 7XNN, ANNN, CXNN)."""

import jax
import jax.numpy as jnp

from chip8vm.state import EmulatorState
from chip8vm.decode import Operation
from chip8vm.registers import get_register, set_register


def execute_set(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=set_register(state.V, instruction.x, instruction.nn))


def execute_add(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """7XNN - Add NN to VX, wrapping; VF is not affected."""
    value = get_register(state.V, instruction.x) + instruction.nn
    return state.replace(V=set_register(state.V, instruction.x, value))


def execute_set_index(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.uint16(instruction.nnn))


def execute_random(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return state.replace(V=set_register(state.V, instruction.x, random_value & instruction.nn), rng=key)
