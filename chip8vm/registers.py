"""General register file helpers (V0-VF)."""

import jax.numpy as jnp

from chip8vm.constants import NUM_REGISTERS, FLAG_REGISTER


def create_registers() -> jnp.ndarray:
    return jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8)


def get_register(V: jnp.ndarray, x: int) -> int:
    assert 0 <= x < NUM_REGISTERS, f"register index {x} out of range"
    return int(V[x])


def set_register(V: jnp.ndarray, x: int, value: int) -> jnp.ndarray:
    """Store ``value`` (truncated to 8 bits) in VX."""
    assert 0 <= x < NUM_REGISTERS, f"register index {x} out of range"
    return V.at[x].set(jnp.uint8(int(value) & 0xFF))


def set_flag(V: jnp.ndarray, condition: bool) -> jnp.ndarray:
    """VF = 1 if condition else 0."""
    return V.at[FLAG_REGISTER].set(jnp.uint8(1 if condition else 0))
