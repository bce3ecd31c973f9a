"""CHIP-8 framebuffer operations.

The framebuffer is a ``(SCREEN_WIDTH, SCREEN_HEIGHT)`` ``uint8`` array of 0/1
pixels indexed ``[x, y]``.
"""

import jax.numpy as jnp

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT

# Bit masks for the 8 sprite columns, most significant bit first
_SPRITE_BITS = jnp.array([0x80 >> i for i in range(8)], dtype=jnp.uint8)


def create_display() -> jnp.ndarray:
    return jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.uint8)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """00E0 - Reset every pixel to 0."""
    return jnp.zeros_like(display)


def draw_byte(display: jnp.ndarray, byte: int, x: int, y: int) -> tuple[jnp.ndarray, bool]:
    """XOR one sprite row onto the framebuffer.

    The start column and row wrap around the screen; columns running past the
    right edge are clipped.

    Returns:
        New framebuffer and whether any lit pixel was turned off
    """
    x = int(x) % SCREEN_WIDTH
    y = int(y) % SCREEN_HEIGHT
    width = min(8, SCREEN_WIDTH - x)

    sprite = ((jnp.uint8(int(byte) & 0xFF) & _SPRITE_BITS[:width]) != 0).astype(jnp.uint8)
    current = display[x:x + width, y]
    collided = bool(jnp.any(current & sprite))

    return display.at[x:x + width, y].set(current ^ sprite), collided
