"""Tests for rendering helpers."""

import numpy as np
import pytest
from PIL import Image
from chip8vm.display import create_display
from chip8vm.rendering import (
    COLOR_SCHEMES, chip8_display_to_rgb, create_color_scheme, save_frame, display_to_text,
)


def lit_display():
    return create_display().at[1, 0].set(1)


def test_display_to_rgb_orientation_and_scale():
    rgb = chip8_display_to_rgb(lit_display(), scale=2, on_color=(255, 255, 255), off_color=(0, 0, 0))
    assert rgb.shape == (64, 128, 3)
    assert (rgb[0, 2] == 255).all()
    assert (rgb[0, 0] == 0).all()


def test_unknown_color_scheme():
    with pytest.raises(ValueError):
        create_color_scheme("plaid")


def test_save_frame(tmp_path):
    path = tmp_path / "frame.png"
    save_frame(lit_display(), path, scale=1, color_scheme="white")
    image = np.array(Image.open(path))
    assert image.shape == (32, 64, 3)
    assert (image[0, 1] == 255).all()


def test_display_to_text():
    lines = display_to_text(lit_display()).splitlines()
    assert len(lines) == 32
    assert lines[0].startswith(".#..")
    assert all(len(line) == 64 for line in lines)


def test_display_to_rgb_uses_palette():
    display = lit_display().at[2, 0].set(1)
    rgb = chip8_display_to_rgb(display, scale=1, on_color=(10, 20, 30), off_color=(1, 2, 3))

    assert rgb.dtype == np.uint8
    assert rgb.shape == (32, 64, 3)
    assert tuple(rgb[0, 1]) == (10, 20, 30)
    assert tuple(rgb[0, 2]) == (10, 20, 30)
    assert tuple(rgb[1, 1]) == (1, 2, 3)


def test_display_to_rgb_rejects_zero_scale():
    with pytest.raises(ValueError):
        chip8_display_to_rgb(lit_display(), scale=0)


@pytest.mark.parametrize("scheme", sorted(COLOR_SCHEMES))
def test_color_schemes(scheme):
    on_color, off_color = create_color_scheme(scheme)
    assert on_color != off_color
