"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Machine, Quirks


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern quirks."""
    return create_state(quirks=Quirks.modern())


@pytest.fixture
def legacy_state():
    """Provide a fresh state with COSMAC VIP quirks."""
    return create_state(quirks=Quirks.legacy())


@pytest.fixture
def machine():
    """Provide a fresh machine with default settings."""
    return Machine()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def rom(*words):
    """Encode 16-bit instruction words as a big-endian ROM image."""
    return b"".join(word.to_bytes(2, "big") for word in words)
