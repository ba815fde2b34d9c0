"""CHIP-8 rendering utilities for visualization."""

import os
from typing import Tuple

import numpy as np
from PIL import Image

from chip8.constants import DISPLAY_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH


def unpack_pixels(framebuffer) -> np.ndarray:
    """Expand packed framebuffer bytes into a (32, 64) boolean array."""
    packed = np.frombuffer(bytes(framebuffer), dtype=np.uint8)
    if packed.size != DISPLAY_SIZE:
        raise ValueError(f"Expected {DISPLAY_SIZE} framebuffer bytes, got {packed.size}")
    return np.unpackbits(packed).reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(np.bool_)


def framebuffer_to_rgb(
    framebuffer,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a packed CHIP-8 framebuffer to an RGB array with optional upscaling.

    Args:
        framebuffer: Packed framebuffer bytes (``Interpreter.framebuffer()``)
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = unpack_pixels(framebuffer)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbour upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def save_screenshot(
    framebuffer,
    filename: str | os.PathLike,
    scale: int = 8,
    color_scheme: str = "classic",
) -> None:
    """Write the framebuffer to an image file (format chosen from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    rgb = framebuffer_to_rgb(framebuffer, scale, on_color, off_color)
    Image.fromarray(rgb).save(filename)
