"""CHIP-8 hexadecimal keypad state."""

from typing import Optional, Sequence

import jax.numpy as jnp
from flax.struct import dataclass, field

from chip8vm.constants import NUM_KEYS


@dataclass(frozen=True)
class KeypadState:
    """Snapshot of the 16 logical keys.

    Attributes:
        keys: Pressed state of keys 0x0-0xF
        waiting: True while an FX0A instruction is blocked waiting for a keypress
    """
    keys: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    waiting: bool = False


def set_keys(keypad: KeypadState, keys: Sequence[bool]) -> KeypadState:
    """Replace the key snapshot."""
    keys = jnp.asarray(keys, dtype=jnp.bool_)
    if keys.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {keys.shape}")
    return keypad.replace(keys=keys)


def is_pressed(keypad: KeypadState, key: int) -> bool:
    """Whether logical key ``key`` (masked to 4 bits) is down."""
    return bool(keypad.keys[int(key) & 0xF])


def next_key(keypad: KeypadState) -> Optional[int]:
    """Lowest-numbered pressed key, or None."""
    if not bool(jnp.any(keypad.keys)):
        return None
    return int(jnp.argmax(keypad.keys))
