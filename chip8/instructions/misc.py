"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chip8.constants import FONT_END, FONT_HEIGHT, FONT_START, INSTRUCTION_SIZE, MEMORY_SIZE
from chip8.decode import DecodedInstruction
from chip8.errors import InvalidAddress, UndefinedHexadecimal
from chip8.state import MachineState


def _check_range(start: int, length: int):
    if start + length > MEMORY_SIZE:
        raise InvalidAddress(start + length - 1)


def _check_writable(start: int, length: int):
    """Writes may not touch the font table, only ``load_rom`` installs it."""
    _check_range(start, length)
    if start < FONT_END:
        raise InvalidAddress(start)


def execute_get_delay_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_wait_for_key(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX0A - Wait for key press.

    Without a pressed key the PC is moved back so this instruction runs again
    on the next step.
    """
    if jnp.any(state.keypad):
        pressed_key = int(jnp.argmax(state.keypad))
        return state.replace(V=state.V.at[instruction.x].set(pressed_key))
    return state.replace(pc=state.pc - INSTRUCTION_SIZE)


def execute_font_character(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x])
    if digit >= 16:
        raise UndefinedHexadecimal(digit)
    font_address = FONT_START + digit * FONT_HEIGHT
    return state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16))


def execute_bcd_conversion(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    start = int(state.I)
    _check_writable(start, 3)

    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[start:start + 3].set(digits))


def execute_store_registers(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    start = int(state.I)
    _check_writable(start, count)
    return state.replace(memory=state.memory.at[start:start + count].set(state.V[:count]))


def execute_load_registers(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    start = int(state.I)
    _check_range(start, count)
    return state.replace(V=state.V.at[:count].set(state.memory[start:start + count]))
