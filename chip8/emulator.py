"""Main CHIP-8 execution engine."""

import os

import jax.numpy as jnp

from chip8.constants import (
    DISPLAY_SIZE, DISPLAY_START, FONT_DATA, FONT_START, INSTRUCTION_SIZE, MAX_ROM_SIZE, MEMORY_SIZE,
    PROGRAM_START,
)
from chip8.decode import Op, decode, identify, mnemonic
from chip8.errors import InvalidAddress, MemoryFull
from chip8.instructions.alu import ALU_INSTRUCTIONS
from chip8.instructions.control_flow import (
    execute_call, execute_jump, execute_jump_with_offset, execute_skip_if_equal_immediate,
    execute_skip_if_equal_register, execute_skip_if_key, execute_skip_if_not_equal_immediate,
    execute_skip_if_not_equal_register, execute_skip_if_not_key,
)
from chip8.instructions.display import execute_display
from chip8.instructions.memory import (
    execute_add, execute_add_to_index, execute_random, execute_set, execute_set_index,
)
from chip8.instructions.misc import (
    execute_bcd_conversion, execute_font_character, execute_get_delay_timer, execute_load_registers,
    execute_set_delay_timer, execute_set_sound_timer, execute_store_registers, execute_wait_for_key,
)
from chip8.instructions.system import execute_clear_screen, execute_return, execute_sys
from chip8.logging import get_logger
from chip8.state import MachineState

logger = get_logger("chip8.emulator")

INSTRUCTION_HANDLERS = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.SYS: execute_sys,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_BYTE: execute_skip_if_equal_immediate,
    Op.SNE_BYTE: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_BYTE: execute_set,
    Op.ADD_BYTE: execute_add,
    **ALU_INSTRUCTIONS,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_not_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I_VX: execute_add_to_index,
    Op.LD_F_VX: execute_font_character,
    Op.LD_B_VX: execute_bcd_conversion,
    Op.LD_I_VX: execute_store_registers,
    Op.LD_VX_I: execute_load_registers,
}

_missing = set(Op) - set(INSTRUCTION_HANDLERS)
if _missing:
    raise RuntimeError(f"No handler for {sorted(op.name for op in _missing)}")


def execute(state: MachineState, instruction: int) -> MachineState:
    """Execute single CHIP-8 instruction.

    The PC is not advanced here; ``fetch`` already moved it past the
    instruction so jumps and skips can set it unconditionally.

    Raises:
        UnknownOpcode: if the word is not a CHIP-8 instruction
    """
    decoded_instruction = decode(instruction)
    op = identify(decoded_instruction)
    return INSTRUCTION_HANDLERS[op](state, decoded_instruction)


def _pack_u16(high, low) -> int:
    """Pack two bytes into a big-endian word."""
    return (int(high) << 8) | int(low)


def fetch(state: MachineState) -> tuple[MachineState, int]:
    """Fetch next instruction from memory and advance the PC."""
    pc = int(state.pc)
    if pc + INSTRUCTION_SIZE > MEMORY_SIZE:
        raise InvalidAddress(pc)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    if logger.is_enabled_for("DEBUG"):
        logger.debug(f"pc = {pc:#06x}, opcode = {instruction:#06x} ({mnemonic(instruction)})")
    return state.replace(pc=jnp.asarray(pc + INSTRUCTION_SIZE, dtype=jnp.uint16)), instruction


def tick_timers(state: MachineState) -> MachineState:
    """Count both timers down by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def step(state: MachineState, tick: bool = True) -> MachineState:
    """Fetch, tick timers, then execute one instruction."""
    state, instruction = fetch(state)
    if tick:
        state = tick_timers(state)
    return execute(state, instruction)


def load_rom(state: MachineState, rom: bytes) -> MachineState:
    """Load ROM data at 0x200, install the font table and blank the display.

    Raises:
        MemoryFull: if the ROM runs past the program area
    """
    rom = bytes(rom)
    if len(rom) > MAX_ROM_SIZE:
        raise MemoryFull(len(rom), MAX_ROM_SIZE)

    memory = state.memory
    if rom:
        rom_array = jnp.array(list(rom), dtype=jnp.uint8)
        memory = memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)
    memory = memory.at[DISPLAY_START:DISPLAY_START + DISPLAY_SIZE].set(0)
    logger.info(f"Loaded {len(rom)} byte ROM at {PROGRAM_START:#05x}")
    return state.replace(memory=memory)


def read_rom(filename: str | os.PathLike) -> bytes:
    """Read a raw ROM image from disk."""
    with open(filename, 'rb') as f:
        return f.read()
