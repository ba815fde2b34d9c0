"""Packed monochrome framebuffer operations.

The framebuffer is ``DISPLAY_SIZE`` bytes, row-major, eight pixels per byte
with the most significant bit leftmost. Sprites are clipped at the screen
edges: rows or bytes that would land outside the 64x32 area are skipped,
nothing wraps around.
"""

from typing import Sequence

import jax.numpy as jnp

from chip8.constants import BYTES_PER_ROW, SCREEN_HEIGHT, SCREEN_WIDTH
from chip8.logging import get_logger

logger = get_logger("chip8.display")


def clear(framebuffer: jnp.ndarray) -> jnp.ndarray:
    return jnp.zeros_like(framebuffer)


def _xor_byte(working: jnp.ndarray, column: int, row: int, value) -> jnp.ndarray:
    if column >= BYTES_PER_ROW:
        return working
    index = row * BYTES_PER_ROW + column
    return working.at[index].set(working[index] ^ value)


def draw_sprite(framebuffer: jnp.ndarray, sprite: Sequence[int], vx: int, vy: int) -> tuple[jnp.ndarray, bool]:
    """XOR an 8-pixel-wide sprite onto the framebuffer at (vx, vy).

    Args:
        framebuffer: Packed framebuffer of ``DISPLAY_SIZE`` bytes
        sprite: One byte per sprite row
        vx: Column of the leftmost sprite pixel
        vy: Row of the top sprite row

    Returns:
        The new framebuffer and whether any pixel went from set to unset
    """
    before = jnp.asarray(framebuffer, dtype=jnp.uint8)
    working = jnp.array(before)
    start, offset = divmod(vx, 8)

    for idx, pixels in enumerate(sprite):
        row = vy + idx
        if row >= SCREEN_HEIGHT or start >= BYTES_PER_ROW:
            logger.debug(f"Clipped sprite row {idx} at ({vx}, {row})")
            continue
        if offset == 0:
            working = _xor_byte(working, start, row, pixels)
        else:
            # Row straddles two bytes; the right half may fall off screen.
            working = _xor_byte(working, start, row, pixels >> offset)
            working = _xor_byte(working, start + 1, row, (pixels << (8 - offset)) & 0xFF)

    collision = bool(jnp.any(before & ~working))
    return working, collision


def pixel(framebuffer: jnp.ndarray, x: int, y: int) -> bool:
    """Value of a single pixel."""
    if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
        return False
    byte = framebuffer[y * BYTES_PER_ROW + x // 8]
    return bool((byte >> (7 - x % 8)) & 1)
