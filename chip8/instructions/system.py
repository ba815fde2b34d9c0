"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp

from chip8.constants import DISPLAY_SIZE, DISPLAY_START
from chip8.decode import DecodedInstruction
from chip8.display import clear
from chip8.logging import get_logger
from chip8.stack import pop
from chip8.state import MachineState, framebuffer

logger = get_logger("chip8.instructions")


def execute_sys(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """0NNN - Call machine code routine; ignored by modern interpreters."""
    logger.info(f"SYS {instruction.nnn:#05x} is ignored")
    return state


def execute_clear_screen(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """00E0 - Clear display."""
    cleared = clear(framebuffer(state))
    return state.replace(memory=state.memory.at[DISPLAY_START:DISPLAY_START + DISPLAY_SIZE].set(cleared))


def execute_return(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.asarray(address, dtype=jnp.uint16))
