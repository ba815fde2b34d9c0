"""CHIP-8 memory layout and machine constants."""

import jax.numpy as jnp

__all__ = [
    "MEMORY_SIZE", "NUM_REGISTERS", "NUM_KEYS", "INSTRUCTION_SIZE", "ADDRESS_MASK",
    "FONT_START", "FONT_HEIGHT", "FONT_END", "FONT_DATA",
    "PROGRAM_START", "PROGRAM_END", "MAX_ROM_SIZE", "STACK_DEPTH",
    "SCREEN_WIDTH", "SCREEN_HEIGHT", "BYTES_PER_ROW", "DISPLAY_START", "DISPLAY_SIZE",
]

MEMORY_SIZE = 4096
NUM_REGISTERS = 16
NUM_KEYS = 16
INSTRUCTION_SIZE = 2
ADDRESS_MASK = 0xFFF

# Fonts live in the low 512 bytes normally used by the interpreter itself.
FONT_START = 0x000
FONT_HEIGHT = 5
FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)
FONT_END = FONT_START + 16 * FONT_HEIGHT

# Programs run from 0x200 up to the reserved stack/display area at 0xEA0.
PROGRAM_START = 0x200
PROGRAM_END = 0xEA0
MAX_ROM_SIZE = PROGRAM_END - PROGRAM_START

# Call stack depth, matching the 96-byte region of 2-byte frames.
STACK_DEPTH = 48

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
BYTES_PER_ROW = SCREEN_WIDTH // 8
DISPLAY_START = 0xF00
DISPLAY_SIZE = SCREEN_WIDTH * SCREEN_HEIGHT // 8
