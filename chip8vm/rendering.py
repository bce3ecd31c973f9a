"""Turn the CHIP-8 framebuffer into images and text.

The framebuffer is ``(SCREEN_WIDTH, SCREEN_HEIGHT)`` and indexed ``[x, y]``;
images are produced row-major, ``(height, width, 3)``.
"""

import os
from typing import Tuple, Union

import jax.numpy as jnp
import numpy as np
from PIL import Image

RGB = Tuple[int, int, int]

# (lit, unlit)
COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def create_color_scheme(scheme: str = "classic") -> Tuple[RGB, RGB]:
    """``(on_color, off_color)`` for a named scheme in ``COLOR_SCHEMES``."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {sorted(COLOR_SCHEMES)}"
        ) from None


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: RGB = (0, 255, 0),
    off_color: RGB = (0, 0, 0),
) -> np.ndarray:
    """Map the 0/1 framebuffer through a two-entry palette.

    Returns a ``uint8`` array of shape ``(32 * scale, 64 * scale, 3)``.
    """
    if scale < 1:
        raise ValueError(f"Scale must be at least 1, got {scale}")
    palette = np.array([off_color, on_color], dtype=np.uint8)
    pixels = np.minimum(np.asarray(display, dtype=np.uint8), 1).T
    if scale > 1:
        pixels = np.kron(pixels, np.ones((scale, scale), dtype=np.uint8))
    return palette[pixels]


def save_frame(
    display: jnp.ndarray,
    filename: Union[str, os.PathLike],
    scale: int = 8,
    color_scheme: str = "classic",
) -> None:
    """Write the display as a PNG (or any format Pillow infers from the name)."""
    on_color, off_color = create_color_scheme(color_scheme)
    rgb = chip8_display_to_rgb(display, scale, on_color, off_color)
    Image.fromarray(rgb).save(filename)


def display_to_text(display: jnp.ndarray, on: str = "#", off: str = ".") -> str:
    """Render the display as 32 lines of 64 characters."""
    pixels = np.asarray(display).T
    return "\n".join("".join(on if p else off for p in row) for row in pixels)
