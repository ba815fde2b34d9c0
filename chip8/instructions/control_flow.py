"""CHIP-8 control flow instructions."""

import jax.numpy as jnp

from chip8.constants import ADDRESS_MASK, INSTRUCTION_SIZE, NUM_KEYS
from chip8.decode import DecodedInstruction
from chip8.errors import WrongKey
from chip8.stack import push
from chip8.state import MachineState


def execute_jump(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_call(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, int(state.pc)))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: MachineState, instruction: DecodedInstruction) -> MachineState:
        if condition_fn(state, instruction):
            return state.replace(pc=state.pc + INSTRUCTION_SIZE)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)


def execute_jump_with_offset(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.nnn + int(state.V[0])) & ADDRESS_MASK
    return state.replace(pc=jnp.asarray(jump_address, dtype=jnp.uint16))


def _key_index(state: MachineState, instruction: DecodedInstruction) -> int:
    key = int(state.V[instruction.x])
    if key >= NUM_KEYS:
        raise WrongKey(key)
    return key


def execute_skip_if_key(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """EX9E - Skip if key VX is pressed."""
    key = _key_index(state, instruction)
    if state.keypad[key]:
        return state.replace(pc=state.pc + INSTRUCTION_SIZE)
    return state


def execute_skip_if_not_key(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """EXA1 - Skip if key VX is not pressed."""
    key = _key_index(state, instruction)
    if not state.keypad[key]:
        return state.replace(pc=state.pc + INSTRUCTION_SIZE)
    return state
