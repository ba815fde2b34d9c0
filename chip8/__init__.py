"""CHIP-8 interpreter package."""

from chip8.constants import *
from chip8.errors import (
    Chip8Error, InvalidAddress, MemoryFull, StackOverflow, StackUnderflow, UndefinedHexadecimal,
    UnknownOpcode, WrongKey,
)
from chip8.state import MachineState, StackState, create_state, framebuffer
from chip8.decode import DecodedInstruction, Op, decode, identify, mnemonic
from chip8.emulator import execute, fetch, load_rom, read_rom, step, tick_timers
from chip8.interpreter import Interpreter
from chip8.rng import FixedRandomSource, JaxRandomSource
from chip8.config import EmulatorConfig, load_config
from chip8.rendering import create_color_scheme, framebuffer_to_rgb, save_screenshot

__all__ = [
    "MachineState",
    "StackState",
    "create_state",
    "framebuffer",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_rom",
    "read_rom",
    "DecodedInstruction",
    "Op",
    "decode",
    "identify",
    "mnemonic",
    "Interpreter",
    "JaxRandomSource",
    "FixedRandomSource",
    "EmulatorConfig",
    "load_config",
    "Chip8Error",
    "MemoryFull",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "UndefinedHexadecimal",
    "WrongKey",
    "InvalidAddress",
    "PROGRAM_START",
    "FONT_START",
    "DISPLAY_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "framebuffer_to_rgb",
    "create_color_scheme",
    "save_screenshot",
]
