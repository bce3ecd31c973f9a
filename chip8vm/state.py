"""CHIP-8 emulator state structures."""

import enum

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import PROGRAM_START
from chip8vm.display import create_display
from chip8vm.keypad import KeypadState
from chip8vm.memory import create_memory
from chip8vm.quirks import Quirks
from chip8vm.registers import create_registers
from chip8vm.stack import StackState


class RunState(enum.Enum):
    """Whether the last step made progress or is blocked on FX0A."""
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=create_memory)
    pc: jnp.ndarray = field(default_factory=lambda: jnp.uint16(PROGRAM_START))
    display: jnp.ndarray = field(default_factory=create_display)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: KeypadState = field(default_factory=KeypadState)
    V: jnp.ndarray = field(default_factory=create_registers)
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    quirks: Quirks = field(pytree_node=False, default=Quirks())

    @property
    def run_state(self) -> RunState:
        return RunState.AWAITING_KEY if self.keypad.waiting else RunState.RUNNING


def create_state(rng: jax.Array = None, quirks: Quirks = None) -> EmulatorState:
    """Create a reset emulator state with font data loaded and PC at PROGRAM_START."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(rng=rng, quirks=quirks if quirks is not None else Quirks())
