"""CHIP-8 stack operations."""

import jax.numpy as jnp
from flax.struct import dataclass, field

from chip8vm.constants import STACK_SIZE, WORD_MASK
from chip8vm.errors import StackOverflow, StackUnderflow


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0

    @property
    def depth(self) -> int:
        return int(self.pointer)


def push(stack: StackState, address: int) -> StackState:
    """Push return address onto stack."""
    pointer = int(stack.pointer)
    if pointer >= STACK_SIZE:
        raise StackOverflow(STACK_SIZE)
    new_data = stack.data.at[pointer].set(jnp.uint16(int(address) & WORD_MASK))
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop return address from stack."""
    pointer = int(stack.pointer)
    if pointer <= 0:
        raise StackUnderflow()
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
